"""
Endpoints de recetas.

Este endpoint maneja:
- GET  /api/v1/recipes: Recetas del usuario (My Recipes)
- GET  /api/v1/recipes/public: Recetas públicas (Discover)
- POST /api/v1/recipes: Agregar una receta a mano
- GET  /api/v1/recipes/{recipe_id}: Detalle de una receta
- GET  /api/v1/recipes/{recipe_id}/markdown: Detalle renderizado
- POST /api/v1/recipes/{recipe_id}/share: Hacer pública una receta
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from recipe_magic_core.core.abstractions import RecipeBackend
from recipe_magic_core.domain_models import ManualRecipeInput, UserContext
from recipe_magic_core.errors import BackendError
from recipe_magic_core.persistence import (
    add_manual_recipe,
    get_recipe,
    list_public_recipes,
    list_user_recipes,
    share_recipe,
)
from recipe_magic_core.renderer import render_markdown

from ..dependencies import get_current_user, get_recipe_backend
from ..models.requests import RecipeCreateRequest, RecipeResponse, ShareRecipeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


@router.get("", response_model=List[RecipeResponse])
def my_recipes(
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Lista las recetas del usuario actual, más nuevas primero.
    """
    try:
        recipes = list_user_recipes(backend, ctx)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    return [RecipeResponse.from_recipe(r) for r in recipes]


@router.get("/public", response_model=List[RecipeResponse])
def public_recipes(backend: RecipeBackend = Depends(get_recipe_backend)):
    """
    Lista las recetas públicas de la comunidad, más nuevas primero.
    """
    try:
        recipes = list_public_recipes(backend)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    return [RecipeResponse.from_recipe(r) for r in recipes]


@router.post("", response_model=RecipeResponse, status_code=201)
def create_recipe(
    request: RecipeCreateRequest,
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Agrega una receta cargada a mano (no generada por IA).

    Args:
        request: Datos del formulario

    Returns:
        La receta creada
    """
    form = ManualRecipeInput(
        title=request.title,
        description=request.description,
        ingredients=request.ingredients,
        instructions=request.instructions,
        prep_time=request.prep_time,
        cook_time=request.cook_time,
        servings=request.servings,
        difficulty=request.difficulty,
        cuisine_type=request.cuisine_type,
        dietary_tags=request.dietary_tags,
    )
    try:
        recipe = add_manual_recipe(backend, ctx, form)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    return RecipeResponse.from_recipe(recipe)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def recipe_detail(
    recipe_id: str,
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Detalle de una receta propia o pública.
    """
    try:
        recipe = get_recipe(backend, ctx, recipe_id)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    return RecipeResponse.from_recipe(recipe)


@router.get("/{recipe_id}/markdown", response_class=PlainTextResponse)
def recipe_markdown(
    recipe_id: str,
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Detalle de una receta renderizado a Markdown.
    """
    try:
        recipe = get_recipe(backend, ctx, recipe_id)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    return PlainTextResponse(render_markdown(recipe), media_type="text/markdown")


@router.post("/{recipe_id}/share", response_model=ShareRecipeResponse)
def share(
    recipe_id: str,
    ctx: UserContext = Depends(get_current_user),
    backend: RecipeBackend = Depends(get_recipe_backend),
):
    """
    Hace pública una receta del usuario actual.

    Solo se modifica la receta si pertenece al usuario; si no, 404.
    """
    try:
        updated = share_recipe(backend, ctx, recipe_id)
    except BackendError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    if not updated:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    return ShareRecipeResponse(
        id=recipe_id,
        is_public=True,
        message="Your recipe is now public and visible in the Discover tab.",
    )
