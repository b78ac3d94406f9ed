"""Domain entities shared by the favorites engine and its read-side collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

COMPOSITE_KEY_SEPARATOR = "_"


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


def favorite_key(user_id: UUID, tip_id: UUID) -> str:
    """Return the storage key identifying the ``(user_id, tip_id)`` bookmark.

    Canonical UUID text never contains the separator, so the key is unique per
    pair and can be split back into its parts unambiguously.
    """

    return f"{user_id}{COMPOSITE_KEY_SEPARATOR}{tip_id}"


@dataclass(frozen=True, slots=True)
class FavoriteRecord:
    """A single user's bookmark of a single tip.

    Records are never updated in place. Removing a favorite deletes the record.
    """

    user_id: UUID
    tip_id: UUID
    added_at: datetime

    @classmethod
    def create(cls, user_id: UUID, tip_id: UUID) -> FavoriteRecord:
        """Build a new record stamped with the current UTC time."""

        return cls(user_id=user_id, tip_id=tip_id, added_at=utcnow())

    @property
    def key(self) -> str:
        return favorite_key(self.user_id, self.tip_id)


@dataclass(frozen=True, slots=True)
class TipStep:
    step_number: int
    description: str


@dataclass(frozen=True, slots=True)
class Tip:
    """Read model of a catalog tip as stored by the tip engine."""

    id: UUID
    title: str
    description: str
    category_id: UUID
    created_at: datetime
    steps: tuple[TipStep, ...] = ()
    tags: tuple[str, ...] = ()
    video_url: str | None = None
    updated_at: datetime | None = None
    is_deleted: bool = False

    @property
    def last_modified(self) -> datetime:
        """Return ``updated_at`` when present, otherwise ``created_at``."""

        return self.updated_at or self.created_at


@dataclass(frozen=True, slots=True)
class Category:
    id: UUID
    name: str
    is_deleted: bool = False


@dataclass(frozen=True, slots=True)
class User:
    id: UUID
    email: str
    name: str
    is_deleted: bool = False


__all__ = [
    "COMPOSITE_KEY_SEPARATOR",
    "Category",
    "FavoriteRecord",
    "Tip",
    "TipStep",
    "User",
    "favorite_key",
    "utcnow",
]
