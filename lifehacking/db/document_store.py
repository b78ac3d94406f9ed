"""Document-store primitives with managed-database limits.

The favorites engine is written against a document database that offers only
single-document reads and writes, per-collection equality queries, "value in
set" queries capped at :data:`MAX_IN_QUERY_VALUES` values, and atomic write
batches capped at :data:`MAX_BATCH_OPERATIONS` operations. :class:`DocumentStore`
implements exactly that surface on top of the ``documents`` table and refuses
anything larger, so callers must chunk their work the same way they would
against the hosted service.

Every public call runs in its own short transaction. A committed
:class:`WriteBatch` is durable immediately, independent of later batches.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lifehacking.db.models import DocumentRow

logger = logging.getLogger(__name__)

DOCUMENT_ID = "__name__"
"""Pseudo field name addressing the document identifier in queries."""

MAX_IN_QUERY_VALUES = 10
MAX_BATCH_OPERATIONS = 500

FieldValue = str | bool | int


class DocumentStoreLimitError(ValueError):
    """Raised when a query or batch exceeds the store's structural limits."""


@dataclass(frozen=True, slots=True)
class DocumentSnapshot:
    """Immutable view of a stored document."""

    id: str
    data: dict[str, Any]


@dataclass(frozen=True, slots=True)
class _WriteOperation:
    kind: Literal["set", "delete"]
    collection: str
    document_id: str
    data: dict[str, Any] | None = None


def _field_clause(field: str, value: FieldValue) -> ColumnElement[bool]:
    """Translate a ``field == value`` predicate into a SQL expression."""

    if field == DOCUMENT_ID:
        return DocumentRow.document_id == str(value)

    element = DocumentRow.data[field]
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    return element.as_string() == value


def _snapshot(row: DocumentRow) -> DocumentSnapshot:
    return DocumentSnapshot(id=row.document_id, data=dict(row.data))


class WriteBatch:
    """Accumulates up to :data:`MAX_BATCH_OPERATIONS` writes committed atomically."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._operations: list[_WriteOperation] = []
        self._committed = False

    def __len__(self) -> int:
        return len(self._operations)

    def _append(self, operation: _WriteOperation) -> None:
        if self._committed:
            raise RuntimeError("Write batch has already been committed")
        if len(self._operations) >= MAX_BATCH_OPERATIONS:
            raise DocumentStoreLimitError(
                f"A write batch accepts at most {MAX_BATCH_OPERATIONS} operations"
            )
        self._operations.append(operation)

    def set(self, collection: str, document_id: str, data: Mapping[str, Any]) -> None:
        """Queue an upsert of ``document_id`` with ``data``."""

        self._append(_WriteOperation("set", collection, document_id, dict(data)))

    def delete(self, collection: str, document_id: str) -> None:
        """Queue removal of ``document_id``; deleting a missing document is a no-op."""

        self._append(_WriteOperation("delete", collection, document_id))

    async def commit(self) -> None:
        """Apply every queued operation in a single transaction."""

        if self._committed:
            raise RuntimeError("Write batch has already been committed")
        await self._store._apply(self._operations)
        self._committed = True


class DocumentStore:
    """Async document store bound to a SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, collection: str, document_id: str) -> DocumentSnapshot | None:
        """Read a single document by identifier."""

        async with self._session_factory() as session:
            row = await session.get(DocumentRow, (collection, document_id))
            return _snapshot(row) if row is not None else None

    async def set(
        self, collection: str, document_id: str, data: Mapping[str, Any]
    ) -> None:
        """Create or overwrite a document."""

        await self._apply([_WriteOperation("set", collection, document_id, dict(data))])

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document. Missing documents are ignored."""

        await self._apply([_WriteOperation("delete", collection, document_id)])

    async def where_equal(
        self, collection: str, filters: Mapping[str, FieldValue]
    ) -> list[DocumentSnapshot]:
        """Return documents whose fields equal every value in ``filters``."""

        query = select(DocumentRow).where(DocumentRow.collection == collection)
        for field, value in filters.items():
            query = query.where(_field_clause(field, value))
        return await self._fetch(query.order_by(DocumentRow.document_id))

    async def where_in(
        self,
        collection: str,
        field: str,
        values: Sequence[FieldValue],
        *,
        filters: Mapping[str, FieldValue] | None = None,
    ) -> list[DocumentSnapshot]:
        """Return documents whose ``field`` is one of ``values``.

        At most :data:`MAX_IN_QUERY_VALUES` values are accepted per call.
        """

        if len(values) > MAX_IN_QUERY_VALUES:
            raise DocumentStoreLimitError(
                f"'in' queries accept at most {MAX_IN_QUERY_VALUES} values,"
                f" received {len(values)}"
            )
        if not values:
            return []

        if field == DOCUMENT_ID:
            membership = DocumentRow.document_id.in_([str(value) for value in values])
        else:
            membership = DocumentRow.data[field].as_string().in_(
                [str(value) for value in values]
            )

        query = select(DocumentRow).where(
            DocumentRow.collection == collection, membership
        )
        for filter_field, value in (filters or {}).items():
            query = query.where(_field_clause(filter_field, value))
        return await self._fetch(query.order_by(DocumentRow.document_id))

    def batch(self) -> WriteBatch:
        """Start a new atomic write batch."""

        return WriteBatch(self)

    async def _fetch(self, query: Any) -> list[DocumentSnapshot]:
        async with self._session_factory() as session:
            result = await session.execute(query)
            return [_snapshot(row) for row in result.scalars().all()]

    async def _apply(self, operations: Iterable[_WriteOperation]) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                for operation in operations:
                    if operation.kind == "set":
                        await session.merge(
                            DocumentRow(
                                collection=operation.collection,
                                document_id=operation.document_id,
                                data=operation.data or {},
                            )
                        )
                    else:
                        await session.execute(
                            delete(DocumentRow).where(
                                DocumentRow.collection == operation.collection,
                                DocumentRow.document_id == operation.document_id,
                            )
                        )


__all__ = [
    "DOCUMENT_ID",
    "DocumentSnapshot",
    "DocumentStore",
    "DocumentStoreLimitError",
    "MAX_BATCH_OPERATIONS",
    "MAX_IN_QUERY_VALUES",
    "WriteBatch",
]
