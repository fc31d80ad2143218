from __future__ import annotations

import logging
from typing import Any

import requests

from .config import get_settings
from .errors import WebhookError

logger = logging.getLogger(__name__)


def _extract_output(data: Any) -> str:
    """
    Saca el campo `output` de la respuesta: `[{"output": "<texto>"}]`.
    """
    if not isinstance(data, list) or not data:
        raise WebhookError("Respuesta del webhook sin el formato esperado (se esperaba una lista)")
    first = data[0]
    if not isinstance(first, dict) or not isinstance(first.get("output"), str):
        raise WebhookError("Respuesta del webhook sin el campo 'output'")
    return first["output"]


def generate_recipe_text(
    prompt: str,
    *,
    url: str | None = None,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> str:
    """
    Envía el prompt al webhook de IA y devuelve el texto generado.

    Hace un único POST con `{"text": prompt}`; no reintenta.

    Raises:
        WebhookError: Si el webhook no está configurado, falla la red, la
            respuesta no es 2xx, el JSON es inválido o falta `output`.
    """
    settings = get_settings()
    webhook_url = url or settings.recipe_webhook_url
    if not webhook_url:
        raise WebhookError("RECIPE_WEBHOOK_URL no está configurada en el .env")

    http = session or requests
    logger.info(f"Enviando prompt al webhook ({len(prompt)} caracteres)")

    try:
        response = http.post(
            webhook_url,
            json={"text": prompt},
            timeout=timeout or settings.recipe_webhook_timeout,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error llamando al webhook: {e}")
        raise WebhookError(f"Error llamando al webhook: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"El webhook devolvió JSON inválido: {e}")
        raise WebhookError("El webhook devolvió JSON inválido") from e

    output = _extract_output(data)
    logger.debug(f"Salida del webhook: {output[:200]}")
    return output
