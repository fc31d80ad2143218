"""
Autenticación con links mágicos (Supabase Auth).

Este módulo maneja:
- El pedido de link mágico por email (el envío lo hace Supabase).
- La resolución de un access token a un `UserContext`.

Validación de tokens
--------------------
- Si `SUPABASE_JWT_SECRET` está configurado, el JWT se valida localmente
  (firma HS256 + audiencia "authenticated") con PyJWT.
- Si no, se valida contra Supabase con `auth.get_user(token)`.
"""

from __future__ import annotations

import logging
from typing import Optional

import jwt  # pyjwt

from .config import get_settings
from .db.supabase_backend import get_supabase_client
from .domain_models import UserContext
from .errors import AuthenticationError, BackendError

logger = logging.getLogger(__name__)

JWT_AUDIENCE = "authenticated"


def bearer_token(authorization: Optional[str]) -> str:
    """
    Extrae el token de un header `Authorization: Bearer <token>`.

    Raises:
        AuthenticationError: Si el header falta o no tiene formato Bearer.
    """
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid Authorization header format. Expected 'Bearer <token>'")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise AuthenticationError("Missing token")
    return token


def send_magic_link(email: str, redirect_to: str | None = None, client=None) -> None:
    """
    Pide a Supabase que envíe un link mágico (OTP por email) a `email`.

    Args:
        email: Email del usuario. Si no existe, Supabase crea la cuenta.
        redirect_to: URL de destino del link (default: MAGIC_LINK_REDIRECT_URL).
        client: Cliente de Supabase (tests); por defecto se crea uno anónimo.

    Raises:
        ValueError: Si el email está vacío.
        BackendError: Con el mensaje del proveedor de auth.
    """
    email = (email or "").strip()
    if not email:
        raise ValueError("Email requerido")

    settings = get_settings()
    client = client or get_supabase_client()
    try:
        client.auth.sign_in_with_otp(
            {
                "email": email,
                "options": {"email_redirect_to": redirect_to or settings.magic_link_redirect_url},
            }
        )
    except Exception as e:
        logger.exception(f"Error enviando link mágico a {email}: {e}")
        raise BackendError(getattr(e, "message", None) or str(e)) from e

    logger.info(f"Link mágico enviado a {email}")


def _decode_locally(token: str, secret: str) -> UserContext:
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token inválido: {e}")
        raise AuthenticationError(f"Invalid token: {e}") from e

    user_id = decoded.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token: no user ID found")

    return UserContext(user_id=user_id, email=decoded.get("email") or "", access_token=token)


def _resolve_with_supabase(token: str, client=None) -> UserContext:
    try:
        client = client or get_supabase_client()
        response = client.auth.get_user(token)
    except BackendError as e:
        raise AuthenticationError(e.message) from e
    except Exception as e:
        logger.warning(f"Supabase rechazó el token: {e}")
        raise AuthenticationError(f"Invalid token: {e}") from e

    user = getattr(response, "user", None)
    if not user:
        raise AuthenticationError("Invalid token")
    return UserContext(user_id=user.id, email=user.email or "", access_token=token)


def resolve_user(token: str, client=None) -> UserContext:
    """
    Valida un access token y devuelve el usuario del request.

    Raises:
        AuthenticationError: Si el token es inválido o expiró.
    """
    secret = get_settings().supabase_jwt_secret
    if secret:
        return _decode_locally(token, secret)
    return _resolve_with_supabase(token, client=client)
