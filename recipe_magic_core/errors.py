"""
Excepciones del core.

Cada tipo corresponde a una categoría de falla que la capa HTTP convierte
en una notificación para el usuario:

- BackendError: falla del backend (red, política RLS, validación). El mensaje
  se muestra tal cual.
- WebhookError: no se obtuvo una respuesta usable del webhook de IA.
- AuthenticationError: token ausente o inválido.

Los campos faltantes al parsear el texto del webhook NO son errores
(ver `recipe_parser`).
"""

from __future__ import annotations


class BackendError(RuntimeError):
    """Falla de una operación contra el backend de persistencia."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class WebhookError(RuntimeError):
    """Falla al obtener la salida del webhook de generación de recetas."""


class AuthenticationError(RuntimeError):
    """Token ausente, inválido o expirado."""
