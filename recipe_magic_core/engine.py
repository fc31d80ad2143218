from __future__ import annotations

"""
recipe_magic_core.engine
========================

Orquestador del flujo "Generate AI Recipe":

    prompt → webhook de IA → parser → adaptador de persistencia

Este módulo no sabe nada de HTTP: la API (y el CLI) lo llaman con un
`UserContext` y un `RecipeBackend` explícitos.

Semántica de fallas
-------------------
- Prompt vacío → ValueError (no se llama al webhook).
- Falla del webhook → WebhookError; no se persiste nada.
- Campos faltantes en el texto → defaults silenciosos (lo resuelve el parser).
- Falla del backend al insertar → BackendError con el mensaje del backend.
"""

import logging
from typing import Callable, TypedDict

from .core.abstractions import RecipeBackend, RecipeTextParser
from .domain_models import ParsedRecipeDraft, Recipe, UserContext
from .persistence import save_draft
from .recipe_parser import RegexRecipeParser, derive_recipe_name
from .webhook_client import generate_recipe_text

logger = logging.getLogger(__name__)


class GenerationResult(TypedDict):
    """
    Resultado de una generación completa.
    """

    display_name: str
    """Nombre legible derivado del prompt (puede ser "")."""

    output_text: str
    """Texto crudo devuelto por el webhook."""

    draft: ParsedRecipeDraft
    """Borrador parseado antes de persistir."""

    recipe: Recipe
    """Receta persistida."""


def generate_ai_recipe(
    *,
    prompt: str,
    ctx: UserContext,
    backend: RecipeBackend,
    parser: RecipeTextParser | None = None,
    generate_text: Callable[[str], str] | None = None,
) -> GenerationResult:
    """
    Genera una receta con IA y la guarda para el usuario actual.

    Args:
        prompt: Pedido libre del usuario (ej: "write a recipe of Biryani").
        ctx: Usuario autenticado.
        backend: Backend de persistencia.
        parser: Estrategia de parsing (default: `RegexRecipeParser`).
        generate_text: Función prompt → texto (default: webhook HTTP).

    Raises:
        ValueError: Si el prompt está vacío.
        WebhookError: Si no hubo respuesta usable del webhook.
        BackendError: Si falla el insert.
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise ValueError("Please enter a recipe request")

    display_name = derive_recipe_name(prompt)
    logger.info(f"Generando receta '{display_name or prompt}' para user {ctx.user_id}")

    # 1) Webhook → texto
    output_text = (generate_text or generate_recipe_text)(prompt)

    # 2) Texto → borrador
    draft = (parser or RegexRecipeParser()).parse(output_text)
    if not draft.title and display_name:
        draft.title = display_name
    if not draft.ingredients or not draft.instructions:
        logger.warning(
            f"Borrador incompleto: {len(draft.ingredients)} ingredientes, "
            f"{len(draft.instructions)} instrucciones"
        )

    # 3) Borrador → fila persistida
    recipe = save_draft(backend, ctx, draft)

    return GenerationResult(
        display_name=display_name,
        output_text=output_text,
        draft=draft,
        recipe=recipe,
    )
