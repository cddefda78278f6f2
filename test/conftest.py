"""
Pytest configuration and fixtures for translatable tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from translatable.config import LocaleConfig  # noqa: E402
from translatable.database import Base, enable_sqlite_savepoints  # noqa: E402
from translatable.models import Content, ContentTranslation  # noqa: E402
from utils.mocks import FakeRecordStore  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def locale_config() -> LocaleConfig:
    """en/fr/de with fr → en and de → fr → en fallback chains."""
    return LocaleConfig(
        locales=("en", "fr", "de", "es"),
        default_locale="en",
        fallback_locales={"fr": ("en",), "de": ("fr", "en")},
    )


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def content() -> Content:
    """A transient Content with English and German translations."""
    item = Content(slug="hello-world")
    item.translations.append(ContentTranslation(locale="en", title="Hello", body="Hello body"))
    item.translations.append(ContentTranslation(locale="de", title="Hallo", body=""))
    return item


@pytest.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory database."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)
    async with session_factory() as session:
        yield session
