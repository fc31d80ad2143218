"""
API HTTP principal para recipe-magic.

Esta aplicación FastAPI expone endpoints REST que usan el core interno
(recipe_magic_core) para guardar, compartir y generar recetas.

Uso:
    uvicorn api.main:app --reload --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from recipe_magic_core.config import get_settings
from recipe_magic_core.db.database import get_db_engine
from recipe_magic_core.db.sql_backend import create_tables

from .routes import auth, recipe_generations, recipes

# Cargar variables de entorno
load_dotenv()

# Determinar ambiente
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Configurar logging según ambiente
log_level = getattr(logging, LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
logger.info(f"🚀 Iniciando API en ambiente: {ENVIRONMENT}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(f"🗄️  Backend de recetas: {settings.recipe_backend}")
    if settings.recipe_backend == "sql":
        # El backend local crea sus tablas al arrancar
        create_tables(get_db_engine(echo=False))
    if not settings.recipe_webhook_url:
        logger.warning("RECIPE_WEBHOOK_URL no configurada: la generación con IA va a fallar.")
    yield


app = FastAPI(
    title="Recipe Magic API",
    description="API para guardar, compartir y generar recetas con IA",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: configurar según ambiente
cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
cors_origins = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]

logger.info(f"🌐 CORS origins configurados: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Registrar rutas
app.include_router(auth.router)
app.include_router(recipes.router)
app.include_router(recipe_generations.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "recipe-magic-api"}


@app.get("/health")
async def health():
    """Health check detallado."""
    return {
        "status": "ok",
        "service": "recipe-magic-api",
        "version": "0.1.0",
    }
