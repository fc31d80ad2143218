"""
Parser de la salida en texto del webhook de IA.

El webhook devuelve un bloque de texto que sigue (más o menos) esta plantilla:

    Title: Chicken Biryani
    Description: Fragrant rice layered with spiced chicken.

    Ingredients:
    - 2 cups basmati rice
    - 500 g chicken

    Instructions:
    1. Soak the rice.
    2. Marinate the chicken.

    prep_time in minutes: 20
    cook_time in minutes: 45
    servings: 4
    difficulty: Medium
    cuisine_type: Indian
    dietary_tags: gluten-free, halal

No hay gramática formal ni versión de la plantilla, así que cada campo se
extrae por separado y cualquier campo ausente o mal formado cae a un valor
vacío (string vacío, lista vacía o 0). El parser es una función total: nunca
lanza excepciones.
"""

from __future__ import annotations

import re
from typing import Dict, List

from .domain_models import ParsedRecipeDraft


# Etiquetas conocidas (case-insensitive, al inicio de línea)
_LABELS: Dict[str, str] = {
    "title": r"title",
    "description": r"description",
    "ingredients": r"ingredients",
    "instructions": r"instructions",
    "prep_time": r"prep[_ ]time(?:\s+in\s+minutes)?",
    "cook_time": r"cook[_ ]time(?:\s+in\s+minutes)?",
    "servings": r"servings",
    "difficulty": r"difficulty",
    "cuisine_type": r"cuisine(?:[_ ]type)?",
    "dietary_tags": r"dietary[_ ]tags",
}

_ANY_LABEL = "|".join(_LABELS.values())


def _line_pattern(label: str) -> re.Pattern[str]:
    return re.compile(
        rf"^[ \t]*(?:{label})[ \t]*:[ \t]*(.*)$",
        re.IGNORECASE | re.MULTILINE,
    )


def _block_pattern(label: str) -> re.Pattern[str]:
    # El bloque termina en la próxima etiqueta conocida (con o sin líneas
    # en blanco antes) o al final del texto.
    return re.compile(
        rf"^[ \t]*(?:{label})[ \t]*:(.*?)(?=^[ \t]*(?:{_ANY_LABEL})[ \t]*:|\Z)",
        re.IGNORECASE | re.MULTILINE | re.DOTALL,
    )


_LINE_PATTERNS = {
    name: _line_pattern(label)
    for name, label in _LABELS.items()
    if name not in ("ingredients", "instructions")
}
_BLOCK_PATTERNS = {
    name: _block_pattern(_LABELS[name]) for name in ("ingredients", "instructions")
}

# Viñetas (-, *, •, +), numeración ("1.", "2)") y "Step 3:".
# "2 cups" o "2.5 kg" son contenido, no marcador.
_LIST_MARKER_RE = re.compile(
    r"^(?:[-*•+]\s*|\d+[.)](?:\s+|$)|step\s+\d+\s*[:.)-]?\s*)+",
    re.IGNORECASE,
)

_LEADING_INT_RE = re.compile(r"\s*(\d+)")

# Frases de arranque típicas del prompt ("write a recipe of Biryani")
_PROMPT_LEAD_IN_RE = re.compile(
    r"^\s*(?:please\s+)?"
    r"(?:(?:write|give\s+me|generate|create)\s+(?:me\s+)?(?:a\s+)?recipe\s+(?:of|for)"
    r"|(?:a\s+)?recipe\s+(?:of|for)"
    r"|how\s+to\s+(?:make|cook)"
    r"|make|cook)\b\s*",
    re.IGNORECASE,
)


def _match_line(text: str, name: str) -> str:
    m = _LINE_PATTERNS[name].search(text)
    return m.group(1).strip() if m else ""


def _match_list(text: str, name: str) -> List[str]:
    m = _BLOCK_PATTERNS[name].search(text)
    if not m:
        return []
    return split_list_block(m.group(1))


def _to_int(value: str) -> int:
    m = _LEADING_INT_RE.match(value or "")
    return int(m.group(1)) if m else 0


def split_list_block(block: str) -> List[str]:
    """
    Divide un bloque en ítems: una línea por ítem, sin viñetas ni numeración,
    sin espacios alrededor y sin líneas vacías.
    """
    items: List[str] = []
    for line in (block or "").splitlines():
        item = _LIST_MARKER_RE.sub("", line.strip()).strip()
        if item:
            items.append(item)
    return items


class RegexRecipeParser:
    """
    Implementación de `RecipeTextParser` basada en expresiones regulares.
    """

    def parse(self, text: str) -> ParsedRecipeDraft:
        if not isinstance(text, str):
            text = ""

        tags = _match_line(text, "dietary_tags")

        return ParsedRecipeDraft(
            title=_match_line(text, "title"),
            description=_match_line(text, "description"),
            ingredients=_match_list(text, "ingredients"),
            instructions=_match_list(text, "instructions"),
            prep_time=_to_int(_match_line(text, "prep_time")),
            cook_time=_to_int(_match_line(text, "cook_time")),
            servings=_to_int(_match_line(text, "servings")),
            difficulty=_match_line(text, "difficulty").lower(),
            cuisine_type=_match_line(text, "cuisine_type"),
            dietary_tags=[t.strip() for t in tags.split(",") if t.strip()],
        )


_default_parser = RegexRecipeParser()


def parse_recipe_text(text: str) -> ParsedRecipeDraft:
    """
    Parsea el texto del webhook con el parser por defecto.
    """
    return _default_parser.parse(text)


def derive_recipe_name(prompt: str) -> str:
    """
    Deriva un nombre legible desde el prompt libre del usuario.

    Best-effort: quita frases de arranque conocidas, normaliza espacios y
    pone en mayúscula la primera letra. Puede devolver "".

    >>> derive_recipe_name("write a recipe of Biryani")
    'Biryani'
    """
    if not isinstance(prompt, str):
        return ""
    name = _PROMPT_LEAD_IN_RE.sub("", prompt, count=1)
    name = " ".join(name.split())
    if not name:
        return ""
    return name[0].upper() + name[1:]
