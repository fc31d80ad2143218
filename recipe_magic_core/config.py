# recipe_magic_core/config.py
from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv

"""
recipe_magic_core.config
========================

Gestión centralizada de configuración de la aplicación.

Este módulo define:
- La estructura de configuración (`Settings`)
- El mecanismo para cargar variables desde entorno (.env)
- Un acceso único y cacheado a la configuración (`get_settings`)

Convenciones
------------
- Las variables de entorno se cargan desde un archivo `.env` si existe.
- Los defaults están pensados para desarrollo local (backend SQL en SQLite).
- En producción, los valores deben venir del entorno real (Supabase + webhook).

Notas importantes
-----------------
- Si una variable crítica (ej. URL del webhook) no está presente,
  el error se lanza en el lugar donde se usa, no acá.
"""

# Cargar variables de entorno desde .env (si existe)
load_dotenv()


@dataclass
class Settings:
    """
    Contenedor tipado de configuración global de la aplicación.

    Attributes
    ----------
    supabase_url:
        URL del proyecto Supabase (backend hospedado: datos + auth).
    supabase_anon_key:
        Clave pública del proyecto. Las consultas se hacen con el token
        del usuario, así que las políticas RLS del backend siguen aplicando.
    supabase_jwt_secret:
        Secreto HS256 para validar access tokens localmente. Si está vacío,
        los tokens se validan contra Supabase (`auth.get_user`).
    recipe_webhook_url:
        Endpoint del webhook de IA que genera recetas en texto plano.
    recipe_webhook_timeout:
        Timeout (segundos) de la llamada al webhook.
    recipe_backend:
        "supabase" o "sql". El backend SQL es para desarrollo local y tests.
    database_url:
        URL SQLAlchemy usada por el backend "sql".
    magic_link_redirect_url:
        URL a la que apunta el link mágico enviado por email.
    """

    # Supabase
    supabase_url: str
    supabase_anon_key: str
    supabase_jwt_secret: str

    # Webhook de IA
    recipe_webhook_url: str
    recipe_webhook_timeout: float = 120.0

    # Persistencia
    recipe_backend: str = "sql"
    database_url: str = "sqlite:///data/recipe_magic.sqlite"

    # Auth
    magic_link_redirect_url: str = "http://localhost:3000"


@lru_cache
def get_settings() -> Settings:
    """
    Devuelve una instancia única y cacheada de `Settings`.

    Variables de entorno utilizadas
    -------------------------------
    - SUPABASE_URL
    - SUPABASE_ANON_KEY
    - SUPABASE_JWT_SECRET
    - RECIPE_WEBHOOK_URL
    - RECIPE_WEBHOOK_TIMEOUT (default: 120)
    - RECIPE_BACKEND (default: "supabase" si hay SUPABASE_URL, si no "sql")
    - DATABASE_URL (default: sqlite:///data/recipe_magic.sqlite)
    - MAGIC_LINK_REDIRECT_URL (default: http://localhost:3000)

    Notas
    -----
    - En tests conviene llamar `get_settings.cache_clear()` después de
      modificar el entorno.
    """
    supabase_url = os.getenv("SUPABASE_URL", "")

    try:
        timeout = float(os.getenv("RECIPE_WEBHOOK_TIMEOUT", "120"))
    except ValueError:
        timeout = 120.0

    return Settings(
        supabase_url=supabase_url,
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
        supabase_jwt_secret=os.getenv("SUPABASE_JWT_SECRET", ""),
        recipe_webhook_url=os.getenv("RECIPE_WEBHOOK_URL", ""),
        recipe_webhook_timeout=timeout,
        recipe_backend=os.getenv(
            "RECIPE_BACKEND",
            "supabase" if supabase_url else "sql",
        ).strip().lower(),
        database_url=os.getenv(
            "DATABASE_URL",
            "sqlite:///data/recipe_magic.sqlite",
        ),
        magic_link_redirect_url=os.getenv(
            "MAGIC_LINK_REDIRECT_URL",
            "http://localhost:3000",
        ),
    )
