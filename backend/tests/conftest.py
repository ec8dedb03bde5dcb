"""
Library Catalog Backend — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_author_repository / mock_book_repository: AsyncMock repositories
    ├── author_service: AuthorService over the mock repositories
    ├── sample_author / sample_book: unsaved ORM instances
    ├── session_factory: async_sessionmaker bound to a temporary SQLite file
    ├── add_author / add_book: helpers persisting records through session_factory
    └── test_client: HTTPX AsyncClient with the session factory overridden
"""

import os
import tempfile
import uuid
from datetime import date
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any catalog import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="catalog_test_"), "unused.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from catalog.database import Base, get_session_factory  # noqa: E402
from catalog.models.author import Author  # noqa: E402
from catalog.models.book import Book  # noqa: E402
from catalog.repositories import AuthorRepository, BookRepository  # noqa: E402
from catalog.services.author_service import AuthorService  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test doubles
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_author_repository():
    """AsyncMock standing in for AuthorRepository; configure return values per test."""
    return AsyncMock(spec=AuthorRepository)


@pytest.fixture
def mock_book_repository():
    repo = AsyncMock(spec=BookRepository)
    repo.find_by_author.return_value = []
    return repo


@pytest.fixture
def author_service(mock_author_repository, mock_book_repository):
    return AuthorService(authors=mock_author_repository, books=mock_book_repository)


@pytest.fixture
def sample_author():
    return Author(
        id=uuid.uuid4(),
        first_name="Jane",
        family_name="Austen",
        date_of_birth=date(1775, 12, 16),
        date_of_death=date(1817, 7, 18),
    )


@pytest.fixture
def sample_book(sample_author):
    return Book(
        id=uuid.uuid4(),
        title="Emma",
        summary="A young woman meddles in the love lives of her neighbours.",
        author_id=sample_author.id,
    )


# ══════════════════════════════════════════════════════════════════════════
# Database-backed fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """
    Session factory over a fresh SQLite database file with the schema created.

    A file (not :memory:) so that concurrent sessions see the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def add_author(session_factory):
    """Persist an Author directly (bypassing the service) and return it."""

    async def _add(first_name: str, family_name: str, **fields) -> Author:
        author = Author(first_name=first_name, family_name=family_name, **fields)
        async with session_factory() as session:
            session.add(author)
            await session.commit()
        return author

    return _add


@pytest.fixture
def add_book(session_factory):
    """Persist a Book referencing `author` and return it."""

    async def _add(author: Author, title: str, summary: str = "") -> Book:
        book = Book(title=title, summary=summary, author_id=author.id)
        async with session_factory() as session:
            session.add(book)
            await session.commit()
        return book

    return _add


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Async HTTP client talking to a fresh app instance through ASGITransport.

    Redirects are not followed so tests can assert on 303 responses.
    """
    from catalog.main import create_app

    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
