"""FastAPI dependency wiring for storage collaborators.

Kept apart from the service modules so tests can override a single factory
(usually :func:`get_document_store`) and reuse everything else.
"""

from __future__ import annotations

from functools import lru_cache

from lifehacking.db.collections import CollectionNameProvider, provider_for_namespace
from lifehacking.db.connection import get_session_factory
from lifehacking.db.document_store import DocumentStore
from lifehacking.settings import get_settings


def get_document_store() -> DocumentStore:
    return DocumentStore(get_session_factory())


@lru_cache(maxsize=1)
def get_collection_names() -> CollectionNameProvider:
    """Return the process-wide provider so every request sees the same names."""

    return provider_for_namespace(get_settings().collection_namespace)


__all__ = ["get_collection_names", "get_document_store"]
