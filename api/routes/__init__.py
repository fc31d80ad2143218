"""Rutas de la API."""

from . import auth, recipe_generations, recipes

__all__ = ["auth", "recipe_generations", "recipes"]
