"""
Modelos ORM del backend SQL local.

Replican las tablas del backend hospedado (`recipes`, `profiles`) con los
mismos nombres de columna, para que el adaptador de persistencia trabaje con
filas (dicts) idénticas en ambos backends.

Las columnas de listas (`ingredients`, `instructions`, `dietary_tags`) son
JSON sin tipo: igual que en el backend hospedado, pueden devolver cualquier
valor JSON y el adaptador las normaliza al leer.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class RecipeRow(Base):
    """
    Receta de un usuario. `is_public` la hace visible en "Discover".
    """
    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), index=True)

    title: Mapped[str] = mapped_column(String(300), default="")
    description: Mapped[str] = mapped_column(Text, default="")

    ingredients = mapped_column(JSON, nullable=True)
    instructions = mapped_column(JSON, nullable=True)

    prep_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutos
    cook_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutos
    servings: Mapped[int] = mapped_column(Integer, default=4)
    difficulty: Mapped[str] = mapped_column(String(20), default="medium")  # "easy" | "medium" | "hard"
    cuisine_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    dietary_tags = mapped_column(JSON, nullable=True)

    is_ai_generated: Mapped[bool] = mapped_column(Boolean, default=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)


class ProfileRow(Base):
    """
    Perfil del usuario (uno por usuario).
    """
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), unique=True, index=True)

    full_name: Mapped[str] = mapped_column(String(200), default="")
    cooking_skill_level: Mapped[str] = mapped_column(String(50), default="")
    dietary_preferences = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


TABLES = {
    "recipes": RecipeRow,
    "profiles": ProfileRow,
}
