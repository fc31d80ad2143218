"""
Modelos de request/response para la API.

Estos modelos definen la estructura esperada de los requests HTTP,
validando tipos y valores antes de pasarlos al core.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from recipe_magic_core.domain_models import Profile, Recipe


class MagicLinkRequest(BaseModel):
    """Request para pedir un link mágico."""

    email: str = Field(..., min_length=3, description="Email del usuario")
    redirect_to: Optional[str] = Field(
        default=None,
        description="URL de destino del link (default: MAGIC_LINK_REDIRECT_URL)",
    )


class MagicLinkResponse(BaseModel):
    """Response del pedido de link mágico."""

    sent: bool
    message: str


class ProfileResponse(BaseModel):
    """Perfil del usuario."""

    full_name: str = ""
    cooking_skill_level: str = ""
    dietary_preferences: List[str] = Field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            full_name=profile.full_name,
            cooking_skill_level=profile.cooking_skill_level,
            dietary_preferences=profile.dietary_preferences,
        )


class CurrentUserResponse(BaseModel):
    """Usuario autenticado y su perfil (si tiene)."""

    id: str
    email: str
    display_name: str = Field(..., description="Nombre del perfil o, si no hay, el email")
    profile: Optional[ProfileResponse] = None


class RecipeCreateRequest(BaseModel):
    """
    Request del formulario "Add Recipe".

    Ingredientes e instrucciones van como texto, un ítem por línea.
    """

    title: str = Field(..., min_length=1, description="Nombre de la receta")
    description: str = Field(default="", description="Descripción breve")
    ingredients: str = Field(default="", description="Ingredientes, uno por línea")
    instructions: str = Field(default="", description="Pasos, uno por línea")
    prep_time: Optional[int] = Field(default=None, ge=0, description="Minutos de preparación")
    cook_time: Optional[int] = Field(default=None, ge=0, description="Minutos de cocción")
    servings: Optional[int] = Field(default=None, ge=0, description="Porciones (default 4)")
    difficulty: Optional[str] = Field(default=None, description="Dificultad (default 'medium')")
    cuisine_type: Optional[str] = Field(default=None, description="Tipo de cocina")
    dietary_tags: Optional[List[str]] = Field(default=None, description="Etiquetas dietarias")


class RecipeResponse(BaseModel):
    """Receta tal como la consume la UI."""

    id: str
    user_id: str
    title: str
    description: str
    ingredients: List[str]
    instructions: List[str]
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    total_time: int
    servings: int
    difficulty: str
    cuisine_type: Optional[str] = None
    dietary_tags: List[str] = Field(default_factory=list)
    is_ai_generated: bool
    is_public: bool
    created_at: str

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeResponse":
        return cls(
            id=recipe.id,
            user_id=recipe.user_id,
            title=recipe.title,
            description=recipe.description,
            ingredients=recipe.ingredients,
            instructions=recipe.instructions,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            total_time=recipe.total_time,
            servings=recipe.servings,
            difficulty=recipe.difficulty,
            cuisine_type=recipe.cuisine_type,
            dietary_tags=recipe.dietary_tags,
            is_ai_generated=recipe.is_ai_generated,
            is_public=recipe.is_public,
            created_at=recipe.created_at,
        )


class ShareRecipeResponse(BaseModel):
    """Response de compartir una receta."""

    id: str
    is_public: bool
    message: str


class RecipeGenerationRequest(BaseModel):
    """Request para generar una receta con IA."""

    prompt: str = Field(..., description="Pedido libre, ej: 'write a recipe of Biryani'")


class RecipeGenerationResponse(BaseModel):
    """Response de una generación con IA."""

    display_name: str = Field(..., description="Nombre derivado del prompt (puede ser vacío)")
    recipe: RecipeResponse
    message: str = "Your AI recipe has been created."
