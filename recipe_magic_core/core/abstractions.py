"""
Abstracciones (Protocols) del core.

Estos protocols definen las dos costuras que el resto del código usa sin
conocer la implementación concreta:

- RecipeBackend: primitivas de consulta contra el backend de persistencia
  (Supabase en producción, SQLAlchemy en desarrollo/tests).
- RecipeTextParser: estrategia para convertir el texto del webhook de IA en
  un borrador estructurado (regex hoy; tokenizer o salida estructurada mañana).
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from ..domain_models import ParsedRecipeDraft

Row = Dict[str, Any]


class RecipeBackend(Protocol):
    """
    Interfaz mínima del backend hospedado.

    Imita las operaciones del cliente generado: filtros por igualdad sobre
    columnas y orden por una columna. Toda falla se reporta como
    `recipe_magic_core.errors.BackendError` con el mensaje del backend.
    """

    def insert(self, table: str, row: Row) -> Row:
        """
        Inserta una fila y devuelve la fila persistida (con `id` y `created_at`).
        """
        ...

    def select(
        self,
        table: str,
        filters: Dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
    ) -> List[Row]:
        """
        Devuelve las filas cuyas columnas coinciden con `filters`.

        Args:
            table: Nombre de la tabla ("recipes" | "profiles")
            filters: Columna -> valor, combinados con AND
            order_by: Columna de orden (opcional)
            descending: True para orden descendente
        """
        ...

    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        """
        Actualiza las filas que coinciden con `filters` y devuelve las afectadas.
        """
        ...


class RecipeTextParser(Protocol):
    """
    Interfaz para parsear la salida en texto del webhook de IA.

    Las implementaciones deben ser funciones totales: nunca lanzan
    excepciones, devuelven campos vacíos cuando no encuentran algo.
    """

    def parse(self, text: str) -> ParsedRecipeDraft:
        ...
