"""
Endpoint para generar recetas con IA.

Este endpoint maneja:
- POST /api/v1/recipe-generations: Enviar un prompt al webhook, parsear la
  respuesta y guardar la receta del usuario
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from recipe_magic_core.core.abstractions import RecipeBackend
from recipe_magic_core.domain_models import UserContext
from recipe_magic_core.engine import generate_ai_recipe
from recipe_magic_core.errors import BackendError, WebhookError

from ..dependencies import get_current_user, get_recipe_backend
from ..models.requests import (
    RecipeGenerationRequest,
    RecipeGenerationResponse,
    RecipeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipe-generations", tags=["recipe-generations"])


@router.post("", response_model=RecipeGenerationResponse, status_code=201)
def create_recipe_generation(
    request: RecipeGenerationRequest,
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Genera una receta con IA a partir de un pedido libre.

    Errores:
        400: Prompt vacío o falla del backend al guardar (mensaje del backend)
        502: El webhook no devolvió una respuesta usable (no se guarda nada)
    """
    try:
        result = generate_ai_recipe(prompt=request.prompt, ctx=ctx, backend=backend)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except WebhookError as e:
        logger.error(f"Error generando receta para {ctx.user_id}: {e}")
        raise HTTPException(status_code=502, detail="Error in generating recipe.") from e
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e

    return RecipeGenerationResponse(
        display_name=result["display_name"],
        recipe=RecipeResponse.from_recipe(result["recipe"]),
    )
