from __future__ import annotations

"""
recipe_magic_core.domain_models
===============================

Modelos de dominio (dataclasses) usados por el parser, el adaptador de
persistencia y el motor de generación.

Principios de diseño
--------------------
- Dataclasses sin lógica pesada: este módulo NO habla con el backend, el
  webhook ni hace IO.
- Los nombres de campo coinciden con las columnas de la tabla `recipes`
  del backend para que el mapeo fila <-> modelo sea directo.
- La identidad del usuario viaja en un `UserContext` explícito (por request),
  nunca como variable global.
"""

from dataclasses import dataclass, field
from typing import List, Optional


# ============================================================
# Identidad
# ============================================================

@dataclass(frozen=True)
class UserContext:
    """
    Usuario autenticado del request actual.

    Attributes:
        user_id:
            ID del usuario en el proveedor de auth (claim `sub` del token).
        email:
            Email con el que pidió el link mágico (puede estar vacío).
        access_token:
            Token del usuario. El backend Supabase lo usa para que las
            políticas RLS se apliquen a cada consulta.
    """
    user_id: str
    email: str = ""
    access_token: str = ""


# ============================================================
# Recetas
# ============================================================

@dataclass
class ParsedRecipeDraft:
    """
    Resultado transitorio de parsear el texto devuelto por el webhook de IA.

    Todos los campos tienen un valor seguro por defecto: el parser nunca
    falla, solo deja vacíos los campos que no pudo extraer.
    """
    title: str = ""
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    prep_time: int = 0
    cook_time: int = 0
    servings: int = 0
    difficulty: str = ""
    cuisine_type: str = ""
    dietary_tags: List[str] = field(default_factory=list)


@dataclass
class ManualRecipeInput:
    """
    Datos que junta el formulario "Add Recipe".

    `ingredients` e `instructions` llegan como texto libre, un ítem por línea.
    Los campos en None se completan con defaults al armar la fila.
    """
    title: str
    description: str = ""
    ingredients: str = ""
    instructions: str = ""
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    difficulty: Optional[str] = None
    cuisine_type: Optional[str] = None
    dietary_tags: Optional[List[str]] = None


@dataclass
class Recipe:
    """
    Receta persistida, ya normalizada desde una fila del backend.
    """
    id: str
    user_id: str
    title: str
    description: str
    ingredients: List[str]
    instructions: List[str]
    prep_time: Optional[int]
    cook_time: Optional[int]
    servings: int
    difficulty: str
    cuisine_type: Optional[str] = None
    dietary_tags: List[str] = field(default_factory=list)
    is_ai_generated: bool = False
    is_public: bool = False
    created_at: str = ""

    @property
    def total_time(self) -> int:
        """Minutos totales (preparación + cocción); los tiempos ausentes cuentan 0."""
        return (self.prep_time or 0) + (self.cook_time or 0)


@dataclass
class Profile:
    """
    Perfil del usuario (solo lectura en este alcance).
    """
    user_id: str
    full_name: str = ""
    cooking_skill_level: str = ""
    dietary_preferences: List[str] = field(default_factory=list)
