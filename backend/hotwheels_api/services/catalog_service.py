"""
HotWheels API — Catalog Service (List & Detail Handlers)
==========================================================

What:  The two data-fetching operations of the API.
Why:   Keeps query construction, empty-result policy and row transformation
       out of the HTTP layer so they can be tested against a mock session.
How:   Each operation issues exactly one query through the request's
       AsyncSession, maps "no rows" to NotFoundError and runs every row
       through the record transformer.
Who:   Called by the catalog dispatcher in routes/catalog.py.

Queries (SQLAlchemy Core, table name from settings):
    list:   SELECT * FROM "HotWheels" LIMIT :max_records
    detail: SELECT * FROM "HotWheels" WHERE id = :model_id

    Both values are bound parameters; the identifier is never interpolated
    into SQL text. The list LIMIT is a ceiling: rows past it are silently
    dropped and there is no continuation token.

Design Decision:
    The catalog has an open-ended column set maintained elsewhere, so rows
    are read as mappings (`result.mappings()`) instead of through an ORM
    model. Only `portada` and `categoria` are interpreted.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import column, literal_column, select, table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hotwheels_api.config import Settings, settings as default_settings
from hotwheels_api.exceptions import DatabaseError, NotFoundError
from hotwheels_api.services.record_transformer import transform_record

logger = logging.getLogger(__name__)

EMPTY_CATALOG_MESSAGE = "No se encontraron registros de Hot Wheels."
MODEL_NOT_FOUND_MESSAGE = "Coche con ID '{model_id}' no encontrado."


class CatalogService:
    """
    Read-only access to the model car catalog.

    Responsibilities:
        - list_models(): the whole catalog, capped at settings.max_records
        - get_model(): one row by identifier

    Stateless apart from configuration; the session is passed per call.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or default_settings
        self._table = table(self._settings.catalog_table, column("id"))

    async def list_models(self, db: AsyncSession) -> List[Dict[str, Any]]:
        """
        Return every catalog row (up to the ceiling), transformed.

        Row order is whatever the database returns; nothing is re-sorted.
        A failure transforming one row fails the whole request.

        Raises:
            NotFoundError: The query returned no rows (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        query = (
            select(literal_column("*"))
            .select_from(self._table)
            .limit(self._settings.max_records)
        )
        try:
            result = await db.execute(query)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Could not list the catalog.",
                context={"table": self._settings.catalog_table, "error_type": type(e).__name__},
            ) from e

        if not rows:
            raise NotFoundError(message=EMPTY_CATALOG_MESSAGE)

        base_url = self._settings.image_base_url
        models = [transform_record(row, base_url) for row in rows]
        logger.debug("Listed %d catalog rows", len(models))
        return models

    async def get_model(self, db: AsyncSession, model_id: str) -> Dict[str, Any]:
        """
        Return one transformed catalog row.

        Args:
            db: Async database session
            model_id: Identifier exactly as it appeared in the path. May be
                      any string; it is only ever used as a bound parameter.

        Raises:
            NotFoundError: No row has this identifier (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        query = (
            select(literal_column("*"))
            .select_from(self._table)
            .where(self._table.c.id == model_id)
        )
        try:
            result = await db.execute(query)
            row = result.mappings().first()
        except SQLAlchemyError as e:
            raise DatabaseError(
                message="Could not retrieve the model.",
                context={"model_id": model_id, "error_type": type(e).__name__},
            ) from e

        if row is None:
            raise NotFoundError(
                message=MODEL_NOT_FOUND_MESSAGE.format(model_id=model_id),
                context={"model_id": model_id},
            )

        return transform_record(row, self._settings.image_base_url)


catalog_service = CatalogService()
