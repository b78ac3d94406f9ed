"""SQLAlchemy ORM model backing the document store.

Every collection (favorites, tips, categories, users) lives in the same
``documents`` table. A document is addressed by ``(collection, document_id)``
and its body is an opaque JSON object, which keeps the storage contract
identical to a managed document database: no joins, no cross-collection
constraints, and queries limited to equality and set membership on fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from lifehacking.entities import utcnow


class Base(DeclarativeBase):
    pass


class DocumentRow(Base):
    """One JSON document inside a named collection."""

    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_collection", "collection"),)

    collection: Mapped[str] = mapped_column(String(128), primary_key=True)
    document_id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        doc=(
            "Caller-chosen identifier. Favorites use the composite"
            " ``<user_id>_<tip_id>`` key so re-writing a pair overwrites the"
            " existing document instead of duplicating it."
        ),
    )
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


__all__ = ["Base", "DocumentRow"]
