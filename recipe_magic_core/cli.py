"""
recipe_magic_core.cli
=====================

Punto de entrada mínimo para probar el parser y el webhook sin levantar la API.

Uso
---
    # Parsear un texto ya generado (archivo con la salida del webhook)
    python -m recipe_magic_core.cli --file salida.txt

    # Llamar al webhook configurado y parsear la respuesta
    python -m recipe_magic_core.cli "write a recipe of Biryani"

Imprime el borrador parseado como JSON. No persiste nada.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from .errors import WebhookError
from .recipe_parser import derive_recipe_name, parse_recipe_text
from .webhook_client import generate_recipe_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Parsea recetas generadas por el webhook de IA")
    parser.add_argument("prompt", nargs="?", help="Pedido libre (se envía al webhook)")
    parser.add_argument("--file", help="Archivo con la salida del webhook (no llama a la red)")
    args = parser.parse_args(argv)

    if args.file:
        try:
            text = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"❌ No se pudo leer {args.file}: {e}", file=sys.stderr)
            return 1
        name = ""
    elif args.prompt:
        try:
            text = generate_recipe_text(args.prompt)
        except WebhookError as e:
            print(f"❌ Error generando la receta: {e}", file=sys.stderr)
            return 1
        name = derive_recipe_name(args.prompt)
    else:
        parser.error("indicá un prompt o --file")

    draft = parse_recipe_text(text)
    out = {"display_name": name, "draft": asdict(draft)}
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
