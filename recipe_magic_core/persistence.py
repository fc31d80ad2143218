"""
Adaptador de persistencia de recetas.

Traduce borradores (del webhook de IA) y datos del formulario manual a la
forma de fila que espera la tabla `recipes`, y ejecuta las operaciones de
lectura / escritura contra un `RecipeBackend`.

Reglas
------
- La identidad del usuario llega siempre en un `UserContext` explícito.
- Los errores del backend se propagan tal cual (`BackendError`), sin reintentos.
- Al leer, los campos de lista se normalizan: el backend puede devolver
  cualquier valor JSON y un valor que no sea lista se convierte en [].
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .core.abstractions import RecipeBackend, Row
from .domain_models import (
    ManualRecipeInput,
    ParsedRecipeDraft,
    Profile,
    Recipe,
    UserContext,
)

logger = logging.getLogger(__name__)

RECIPES_TABLE = "recipes"
PROFILES_TABLE = "profiles"

DEFAULT_SERVINGS = 4
DEFAULT_DIFFICULTY = "medium"

LIST_FIELDS = ("ingredients", "instructions", "dietary_tags")


# ============================================================
# Normalización
# ============================================================

def as_list(value: Any) -> List[str]:
    """
    Devuelve `value` como lista de strings; cualquier otra cosa es [].
    """
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def as_int(value: Any, default: int = 0) -> int:
    """
    Convierte a int; si no se puede, devuelve `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return as_int(value)


def split_lines(text: str) -> List[str]:
    """
    Un ítem por línea, sin espacios alrededor y sin líneas vacías.
    """
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def recipe_from_row(row: Row) -> Recipe:
    """
    Construye un `Recipe` desde una fila del backend, tolerando valores
    ausentes o de tipo inesperado.
    """
    cuisine = row.get("cuisine_type")
    return Recipe(
        id=str(row.get("id", "")),
        user_id=str(row.get("user_id", "")),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        ingredients=as_list(row.get("ingredients")),
        instructions=as_list(row.get("instructions")),
        prep_time=_as_optional_int(row.get("prep_time")),
        cook_time=_as_optional_int(row.get("cook_time")),
        servings=as_int(row.get("servings")),
        difficulty=str(row.get("difficulty") or ""),
        cuisine_type=str(cuisine) if cuisine else None,
        dietary_tags=as_list(row.get("dietary_tags")),
        is_ai_generated=bool(row.get("is_ai_generated", False)),
        is_public=bool(row.get("is_public", False)),
        created_at=str(row.get("created_at") or ""),
    )


# ============================================================
# Armado de filas
# ============================================================

def draft_to_row(draft: ParsedRecipeDraft, user_id: str) -> Row:
    """
    Fila para insertar una receta generada por IA.
    """
    return {
        "user_id": user_id,
        "title": draft.title,
        "description": draft.description,
        "ingredients": list(draft.ingredients),
        "instructions": list(draft.instructions),
        "prep_time": as_int(draft.prep_time),
        "cook_time": as_int(draft.cook_time),
        "servings": as_int(draft.servings),
        "difficulty": draft.difficulty,
        "cuisine_type": draft.cuisine_type,
        "dietary_tags": list(draft.dietary_tags),
        "is_ai_generated": True,
    }


def manual_to_row(form: ManualRecipeInput, user_id: str) -> Row:
    """
    Fila para insertar una receta cargada a mano.

    Ingredientes e instrucciones llegan como texto (una línea por ítem).
    Los tiempos omitidos quedan en None; porciones y dificultad omitidas
    toman los defaults.

    Raises:
        ValueError: Si el título queda vacío o no hay ingredientes o
            instrucciones después de limpiar espacios.
    """
    title = (form.title or "").strip()
    ingredients = split_lines(form.ingredients)
    instructions = split_lines(form.instructions)
    if not title:
        raise ValueError("Please enter a recipe title")
    if not ingredients:
        raise ValueError("Please add at least one ingredient")
    if not instructions:
        raise ValueError("Please add at least one instruction")

    row: Row = {
        "user_id": user_id,
        "title": title,
        "description": (form.description or "").strip(),
        "ingredients": ingredients,
        "instructions": instructions,
        "prep_time": _as_optional_int(form.prep_time),
        "cook_time": _as_optional_int(form.cook_time),
        "servings": form.servings,
        "difficulty": form.difficulty,
        "is_ai_generated": False,
    }
    if form.cuisine_type:
        row["cuisine_type"] = form.cuisine_type.strip()
    if form.dietary_tags:
        row["dietary_tags"] = [t.strip() for t in form.dietary_tags if t and t.strip()]
    return row


# ============================================================
# Operaciones
# ============================================================

def insert_recipe(backend: RecipeBackend, ctx: UserContext, row: Row) -> Recipe:
    """
    Inserta una receta del usuario actual.

    - `user_id` siempre sale de `ctx`.
    - Completa porciones y dificultad si el llamador no las indicó.

    Raises:
        BackendError: Con el mensaje del backend, sin reintentar.
    """
    values = dict(row)
    values["user_id"] = ctx.user_id
    if values.get("servings") is None:
        values["servings"] = DEFAULT_SERVINGS
    if values.get("difficulty") is None:
        values["difficulty"] = DEFAULT_DIFFICULTY
    for field_name in LIST_FIELDS:
        if field_name in values:
            values[field_name] = as_list(values[field_name])

    inserted = backend.insert(RECIPES_TABLE, values)
    logger.info(
        f"Receta insertada (user={ctx.user_id}, ai={values.get('is_ai_generated', False)})"
    )
    return recipe_from_row(inserted)


def add_manual_recipe(backend: RecipeBackend, ctx: UserContext, form: ManualRecipeInput) -> Recipe:
    return insert_recipe(backend, ctx, manual_to_row(form, ctx.user_id))


def save_draft(backend: RecipeBackend, ctx: UserContext, draft: ParsedRecipeDraft) -> Recipe:
    return insert_recipe(backend, ctx, draft_to_row(draft, ctx.user_id))


def list_user_recipes(backend: RecipeBackend, ctx: UserContext) -> List[Recipe]:
    """
    Recetas del usuario actual, más nuevas primero.
    """
    rows = backend.select(
        RECIPES_TABLE,
        {"user_id": ctx.user_id},
        order_by="created_at",
        descending=True,
    )
    return [recipe_from_row(r) for r in rows]


def list_public_recipes(backend: RecipeBackend) -> List[Recipe]:
    """
    Recetas públicas de todos los usuarios, más nuevas primero.
    """
    rows = backend.select(
        RECIPES_TABLE,
        {"is_public": True},
        order_by="created_at",
        descending=True,
    )
    return [recipe_from_row(r) for r in rows]


def share_recipe(backend: RecipeBackend, ctx: UserContext, recipe_id: str) -> bool:
    """
    Marca una receta como pública.

    El filtro incluye `id` Y `user_id`: una receta de otro usuario nunca se
    modifica, aunque el backend no tenga políticas de acceso.

    Returns:
        True si se actualizó una fila.
    """
    updated = backend.update(
        RECIPES_TABLE,
        {"is_public": True},
        {"id": recipe_id, "user_id": ctx.user_id},
    )
    if not updated:
        logger.warning(f"share_recipe: ninguna receta {recipe_id} para user {ctx.user_id}")
    return bool(updated)


def get_recipe(backend: RecipeBackend, ctx: UserContext, recipe_id: str) -> Optional[Recipe]:
    """
    Detalle de una receta si es del usuario o es pública; si no, None.
    """
    rows = backend.select(RECIPES_TABLE, {"id": recipe_id})
    if not rows:
        return None
    recipe = recipe_from_row(rows[0])
    if recipe.user_id != ctx.user_id and not recipe.is_public:
        return None
    return recipe


def get_profile(backend: RecipeBackend, ctx: UserContext) -> Optional[Profile]:
    """
    Perfil del usuario actual; None si todavía no tiene.
    """
    rows = backend.select(PROFILES_TABLE, {"user_id": ctx.user_id})
    if not rows:
        return None
    row = rows[0]
    return Profile(
        user_id=str(row.get("user_id", ctx.user_id)),
        full_name=str(row.get("full_name") or ""),
        cooking_skill_level=str(row.get("cooking_skill_level") or ""),
        dietary_preferences=as_list(row.get("dietary_preferences")),
    )
