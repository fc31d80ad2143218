"""
Endpoints de autenticación usando Supabase Auth (links mágicos).

Este módulo maneja:
- Pedido de link mágico por email
- Validación de tokens
- Obtención del usuario autenticado y su perfil
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import Optional
import logging

from pydantic import BaseModel

from recipe_magic_core.auth import resolve_user, send_magic_link
from recipe_magic_core.core.abstractions import RecipeBackend
from recipe_magic_core.domain_models import UserContext
from recipe_magic_core.errors import AuthenticationError, BackendError
from recipe_magic_core.persistence import get_profile

from ..dependencies import get_current_user, get_recipe_backend
from ..models.requests import (
    CurrentUserResponse,
    MagicLinkRequest,
    MagicLinkResponse,
    ProfileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


class VerifyTokenRequest(BaseModel):
    """Request para verificar un token."""
    token: str


class VerifyTokenResponse(BaseModel):
    """Response de verificación de token."""
    valid: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    error: Optional[str] = None


@router.post("/magic-link", response_model=MagicLinkResponse)
def request_magic_link(request: MagicLinkRequest):
    """
    Envía un link mágico al email indicado.

    No requiere autenticación. El error del proveedor se devuelve tal cual.
    """
    try:
        send_magic_link(request.email, redirect_to=request.redirect_to)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e

    return MagicLinkResponse(
        sent=True,
        message="Check your email for the magic link!",
    )


@router.post("/verify-token", response_model=VerifyTokenResponse)
def verify_token(request: VerifyTokenRequest):
    """
    Verifica un access token.

    Returns:
        Información sobre la validez del token y el usuario
    """
    try:
        ctx = resolve_user(request.token)
    except AuthenticationError as e:
        return VerifyTokenResponse(valid=False, error=str(e))

    return VerifyTokenResponse(valid=True, user_id=ctx.user_id, email=ctx.email)


@router.get("/user", response_model=CurrentUserResponse)
def current_user(
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Usuario autenticado con su perfil.

    El perfil es opcional: si la consulta falla se loguea y se responde sin él.
    """
    profile = None
    try:
        profile = get_profile(backend, ctx)
    except BackendError as e:
        logger.error(f"Error obteniendo perfil de {ctx.user_id}: {e.message}")

    return CurrentUserResponse(
        id=ctx.user_id,
        email=ctx.email,
        display_name=(profile.full_name if profile and profile.full_name else ctx.email),
        profile=ProfileResponse.from_profile(profile) if profile else None,
    )
