"""
Dependencias de FastAPI para autenticación y acceso al backend.

Este módulo proporciona dependencias reutilizables para:
- Obtener el usuario actual (`UserContext`) desde el token del header
- Obtener el backend de persistencia autenticado para ese usuario
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from recipe_magic_core.auth import bearer_token, resolve_user
from recipe_magic_core.core.abstractions import RecipeBackend
from recipe_magic_core.db.backends import get_backend
from recipe_magic_core.domain_models import UserContext
from recipe_magic_core.errors import AuthenticationError, BackendError

import logging

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> UserContext:
    """
    Obtiene el usuario actual desde el token del header Authorization.

    Args:
        authorization: Header Authorization con formato "Bearer <token>"

    Returns:
        UserContext del request

    Raises:
        HTTPException: 401 si el token falta o es inválido
    """
    try:
        token = bearer_token(authorization)
        return resolve_user(token)
    except AuthenticationError as e:
        logger.warning(f"Autenticación rechazada: {e}")
        raise HTTPException(status_code=401, detail=str(e)) from e


def get_recipe_backend(
    ctx: UserContext = Depends(get_current_user),
) -> RecipeBackend:
    """
    Backend de persistencia del request, autenticado con el token del usuario.

    Raises:
        HTTPException: 503 si el backend configurado no está disponible
    """
    try:
        return get_backend(ctx)
    except BackendError as e:
        logger.error(f"Backend no disponible: {e.message}")
        raise HTTPException(status_code=503, detail=e.message) from e
