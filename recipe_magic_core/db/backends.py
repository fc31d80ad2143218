"""
Selección del backend de persistencia.

- SupabaseBackend: backend hospedado (producción).
- SqlBackend: réplica SQLAlchemy de las mismas tablas (desarrollo y tests).

`get_backend(ctx)` elige uno según `Settings.recipe_backend`.
"""

from __future__ import annotations

from ..config import get_settings
from ..domain_models import UserContext
from .sql_backend import SqlBackend
from .supabase_backend import SupabaseBackend


def get_backend(ctx: UserContext | None = None):
    """
    Devuelve el backend configurado para el request actual.

    Con Supabase el cliente queda autenticado con el token del usuario
    (o anónimo si no hay contexto, p. ej. para el feed público).
    """
    settings = get_settings()
    if settings.recipe_backend == "supabase":
        return SupabaseBackend.for_token(ctx.access_token if ctx else "")
    return SqlBackend()


