"""Shared fixtures: an in-memory document store seeded with a small catalog."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lifehacking.db.collections import TestCollectionNameProvider
from lifehacking.db.connection import create_session_factory
from lifehacking.db.models import Base
from lifehacking.db.stores import CategoryStore, FavoriteStore, TipStore, UserStore
from lifehacking.entities import Category, Tip, User
from lifehacking.repositories import FavoritesRepository
from lifehacking.services.favorites_service import FavoritesService
from tests.support.doubles import (
    CountingCategoryLookup,
    CountingTipLookup,
    RecordingDocumentStore,
)
from tests.support.factories import make_tip


@dataclass
class Catalog:
    user: User
    kitchen: Category
    cleaning: Category
    tips: dict[str, Tip] = field(default_factory=dict)

    def tip(self, name: str) -> Tip:
        return self.tips[name]


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite shared across sessions through a single connection."""

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
def document_store(
    session_factory: async_sessionmaker[AsyncSession],
) -> RecordingDocumentStore:
    return RecordingDocumentStore(session_factory)


@pytest.fixture
def collections() -> TestCollectionNameProvider:
    return TestCollectionNameProvider()


@pytest.fixture
def favorite_store(document_store, collections) -> FavoriteStore:
    return FavoriteStore(document_store, collections)


@pytest.fixture
def tip_store(document_store, collections) -> TipStore:
    return TipStore(document_store, collections)


@pytest.fixture
def category_store(document_store, collections) -> CategoryStore:
    return CategoryStore(document_store, collections)


@pytest.fixture
def user_store(document_store, collections) -> UserStore:
    return UserStore(document_store, collections)


@pytest_asyncio.fixture
async def catalog(tip_store, category_store, user_store, document_store) -> Catalog:
    """One user, two categories and a handful of tips; query counters start at zero."""

    user = await user_store.save(User(id=uuid4(), email="ada@example.com", name="Ada"))
    kitchen = await category_store.save(Category(id=uuid4(), name="Kitchen"))
    cleaning = await category_store.save(Category(id=uuid4(), name="Cleaning"))

    catalog = Catalog(user=user, kitchen=kitchen, cleaning=cleaning)
    for key, tip in {
        "avocado": make_tip(
            "Ripen avocados faster",
            category=kitchen,
            description="Put them in a paper bag with a banana.",
            tags=("produce", "Quick"),
            offset_days=1,
            updated_offset_days=10,
        ),
        "bread": make_tip(
            "Revive stale bread",
            category=kitchen,
            description="Splash with water and bake for five minutes.",
            tags=("baking",),
            offset_days=2,
        ),
        "grout": make_tip(
            "Clean grout with baking soda",
            category=cleaning,
            description="A paste of baking soda and vinegar lifts stains.",
            tags=("bathroom", "quick"),
            offset_days=3,
        ),
        "zipper": make_tip(
            "Fix a stuck zipper",
            category=cleaning,
            description="Rub a graphite pencil along the teeth.",
            offset_days=4,
            updated_offset_days=5,
        ),
    }.items():
        catalog.tips[key] = await tip_store.save(tip)

    document_store.reset()
    return catalog


@pytest.fixture
def counting_tips(tip_store) -> CountingTipLookup:
    return CountingTipLookup(tip_store)


@pytest.fixture
def counting_categories(category_store) -> CountingCategoryLookup:
    return CountingCategoryLookup(category_store)


@pytest.fixture
def favorites_repository(favorite_store, counting_tips) -> FavoritesRepository:
    return FavoritesRepository(favorite_store, counting_tips)


@pytest.fixture
def service(
    document_store, collections, counting_tips, counting_categories, user_store
) -> FavoritesService:
    return FavoritesService.from_store(
        document_store,
        collections,
        tips=counting_tips,
        categories=counting_categories,
        users=user_store,
    )


@pytest.fixture
def unknown_id() -> UUID:
    return uuid4()
