"""
Backend hospedado (Supabase) accedido con el cliente generado.

Cada instancia queda autenticada con el access token del usuario, así que
las políticas de row-level security del proyecto se aplican además de los
filtros que arma el adaptador de persistencia.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..config import get_settings
from ..core.abstractions import Row
from ..errors import BackendError

logger = logging.getLogger(__name__)


def get_supabase_client(access_token: str | None = None) -> Client:
    """
    Crea un cliente de Supabase con la clave pública del proyecto.

    Args:
        access_token: Token del usuario. Si se pasa, las consultas a tablas
            se hacen en nombre de ese usuario.

    Raises:
        BackendError: Si SUPABASE_URL / SUPABASE_ANON_KEY no están configuradas.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise BackendError("Supabase not configured")

    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    if access_token:
        client.postgrest.auth(access_token)
    return client


def _filter_value(value: Any) -> Any:
    # PostgREST recibe los filtros como texto
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class SupabaseBackend:
    """
    Implementación de `RecipeBackend` sobre el cliente de Supabase.
    """

    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def for_token(cls, access_token: str) -> "SupabaseBackend":
        return cls(get_supabase_client(access_token))

    def insert(self, table: str, row: Row) -> Row:
        try:
            response = self._client.table(table).insert(row).execute()
        except APIError as e:
            logger.error(f"Error insertando en {table}: {e.message}")
            raise BackendError(e.message or str(e), code=e.code) from e
        data = response.data or []
        return data[0] if data else dict(row)

    def select(
        self,
        table: str,
        filters: Dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
    ) -> List[Row]:
        query = self._client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, _filter_value(value))
        if order_by:
            query = query.order(order_by, desc=descending)
        try:
            response = query.execute()
        except APIError as e:
            logger.error(f"Error consultando {table}: {e.message}")
            raise BackendError(e.message or str(e), code=e.code) from e
        return list(response.data or [])

    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        query = self._client.table(table).update(values)
        for column, value in filters.items():
            query = query.eq(column, _filter_value(value))
        try:
            response = query.execute()
        except APIError as e:
            logger.error(f"Error actualizando {table}: {e.message}")
            raise BackendError(e.message or str(e), code=e.code) from e
        return list(response.data or [])
