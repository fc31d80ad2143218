#!/usr/bin/env python3
"""
Script rápido para probar la generación de recetas contra la API corriendo.

Uso:
    python tools/generate_recipe.py <access_token> "<prompt>" [base_url]

Ejemplos:
    python tools/generate_recipe.py eyJhbGciOi... "write a recipe of Biryani"
    python tools/generate_recipe.py eyJhbGciOi... "recipe for lasagna" http://localhost:8000
"""

import sys
import requests


def generate_recipe(token: str, prompt: str, base_url: str = "http://localhost:8000"):
    """
    Pide una receta generada con IA y muestra el resultado.

    Args:
        token: Access token del usuario (Supabase)
        prompt: Pedido libre
        base_url: URL base de la API
    """
    print(f"🍳 Prompt: {prompt}")
    print("📤 Enviando request...")

    try:
        response = requests.post(
            f"{base_url}/api/v1/recipe-generations",
            json={"prompt": prompt},
            headers={"Authorization": f"Bearer {token}"},
            timeout=300,
        )
    except requests.exceptions.ConnectionError:
        print("❌ Error: No se pudo conectar al servidor")
        print(f"   Asegúrate de que el backend esté corriendo en {base_url}")
        sys.exit(1)
    except requests.exceptions.Timeout:
        print("⏱️  Timeout: El webhook está tardando más de lo esperado")
        sys.exit(1)

    if response.status_code != 201:
        print(f"❌ Error: HTTP {response.status_code}")
        try:
            print(f"   Detalle: {response.json().get('detail', 'Error desconocido')}")
        except ValueError:
            print(f"   Respuesta: {response.text}")
        sys.exit(1)

    result = response.json()
    recipe = result["recipe"]
    print("✅ Receta creada exitosamente!")
    print()
    print(f"🆔 ID: {recipe['id']}")
    print(f"📛 Nombre derivado: {result.get('display_name') or '(vacío)'}")
    print(f"🍽️  Título: {recipe['title']}")
    print(f"⏱️  Tiempo total: {recipe['total_time']}m · {recipe['servings']} porciones · {recipe['difficulty']}")
    print(f"🥕 Ingredientes: {len(recipe['ingredients'])}")
    print(f"📝 Instrucciones: {len(recipe['instructions'])}")


if __name__ == '__main__':
    if len(sys.argv) < 3:
        print("Uso: python tools/generate_recipe.py <access_token> \"<prompt>\" [base_url]")
        sys.exit(1)

    base = sys.argv[3] if len(sys.argv) > 3 else "http://localhost:8000"
    generate_recipe(sys.argv[1], sys.argv[2], base)
