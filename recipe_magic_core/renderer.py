"""
Renderer de recetas a Markdown.

Arma la vista de detalle de una receta (la misma información que el modal de
detalle de la UI): encabezado, origen, estadísticas de tiempo/porciones,
etiquetas, ingredientes e instrucciones numeradas.
"""

from __future__ import annotations

from typing import List

from .domain_models import Recipe


def _time_line(recipe: Recipe) -> str:
    line = f"**{recipe.total_time}m** total"
    if recipe.prep_time and recipe.cook_time:
        line += f" ({recipe.prep_time}m prep + {recipe.cook_time}m cook)"
    return line


class RecipeRenderer:
    """
    Renderiza un `Recipe` a Markdown.
    """

    def render_markdown(self, recipe: Recipe) -> str:
        lines: List[str] = []
        lines.append(f"# {recipe.title or 'Untitled recipe'}\n\n")

        origin = "AI Generated" if recipe.is_ai_generated else "Added Recipe"
        lines.append(f"_{origin}_\n\n")

        if recipe.description.strip():
            lines.append(f"{recipe.description.strip()}\n\n")

        # ESTADÍSTICAS
        lines.append(f"- {_time_line(recipe)}\n")
        lines.append(f"- **{recipe.servings}** servings\n")
        if recipe.difficulty.strip():
            lines.append(f"- Difficulty: {recipe.difficulty.strip().capitalize()}\n")
        if recipe.cuisine_type:
            lines.append(f"- Cuisine: {recipe.cuisine_type}\n")
        lines.append("\n")

        if recipe.dietary_tags:
            lines.append(" ".join(f"`{tag}`" for tag in recipe.dietary_tags) + "\n\n")

        # INGREDIENTES
        lines.append("## Ingredients\n\n")
        if recipe.ingredients:
            for ing in recipe.ingredients:
                lines.append(f"- {ing}\n")
        else:
            lines.append("_No ingredients listed._\n")
        lines.append("\n")

        # INSTRUCCIONES
        lines.append("## Instructions\n\n")
        if recipe.instructions:
            for i, step in enumerate(recipe.instructions, start=1):
                lines.append(f"{i}. {step}\n")
        else:
            lines.append("_No instructions listed._\n")

        return "".join(lines)


def render_markdown(recipe: Recipe) -> str:
    return RecipeRenderer().render_markdown(recipe)
