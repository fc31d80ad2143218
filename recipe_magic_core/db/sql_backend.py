"""
Backend SQL (SQLAlchemy) con la misma interfaz que el cliente hospedado.

Se usa en desarrollo local (`RECIPE_BACKEND=sql`) y en tests. Devuelve filas
como dicts con `created_at` en ISO-8601, igual que la API REST de Supabase.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.abstractions import Row
from ..errors import BackendError
from .database import Base, get_db_session
from .models import TABLES

logger = logging.getLogger(__name__)


def _row_to_dict(obj: Any) -> Row:
    data: Row = {}
    for column in inspect(obj).mapper.column_attrs:
        value = getattr(obj, column.key)
        if isinstance(value, datetime):
            value = value.isoformat()
        data[column.key] = value
    return data


def _model_for(table: str):
    model = TABLES.get(table)
    if model is None:
        raise BackendError(f'relation "{table}" does not exist')
    return model


class SqlBackend:
    """
    Implementación de `RecipeBackend` sobre SQLAlchemy.

    Args:
        engine: Engine propio (tests). Si es None se usa el engine global
            de `recipe_magic_core.db.database`.
    """

    def __init__(self, engine: Engine | None = None):
        self._session_factory = None
        if engine is not None:
            self._session_factory = sessionmaker(
                bind=engine, autoflush=False, autocommit=False, future=True
            )

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            with get_db_session() as session:
                yield session
            return

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def insert(self, table: str, row: Row) -> Row:
        model = _model_for(table)
        values = dict(row)
        if isinstance(values.get("created_at"), str):
            values["created_at"] = datetime.fromisoformat(values["created_at"])
        try:
            with self._session() as session:
                obj = model(**values)
                session.add(obj)
                session.flush()
                return _row_to_dict(obj)
        except (SQLAlchemyError, TypeError, ValueError) as e:
            logger.error(f"Error insertando en {table}: {e}")
            raise BackendError(str(getattr(e, "orig", None) or e)) from e

    def select(
        self,
        table: str,
        filters: Dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
    ) -> List[Row]:
        model = _model_for(table)
        try:
            stmt = select(model).filter_by(**filters)
            if order_by:
                column = getattr(model, order_by)
                stmt = stmt.order_by(column.desc() if descending else column.asc())
            with self._session() as session:
                return [_row_to_dict(obj) for obj in session.execute(stmt).scalars().all()]
        except (SQLAlchemyError, AttributeError) as e:
            logger.error(f"Error consultando {table}: {e}")
            raise BackendError(str(getattr(e, "orig", None) or e)) from e

    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        model = _model_for(table)
        unknown = [key for key in values if key not in model.__table__.columns]
        if unknown:
            raise BackendError(f"column \"{unknown[0]}\" of relation \"{table}\" does not exist")
        try:
            with self._session() as session:
                matched = session.execute(select(model).filter_by(**filters)).scalars().all()
                for obj in matched:
                    for key, value in values.items():
                        setattr(obj, key, value)
                session.flush()
                return [_row_to_dict(obj) for obj in matched]
        except SQLAlchemyError as e:
            logger.error(f"Error actualizando {table}: {e}")
            raise BackendError(str(getattr(e, "orig", None) or e)) from e


def create_tables(engine: Engine) -> None:
    """Crea las tablas del backend SQL si no existen."""
    Base.metadata.create_all(bind=engine)
