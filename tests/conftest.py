"""Pytest configuration and fixtures."""

import os
from types import SimpleNamespace
from typing import List, Sequence
from unittest.mock import AsyncMock

import pytest

# Small vectors keep fixtures readable; the ORM reads this when the models import
os.environ["EMBEDDING_DIMENSION"] = "3"
os.environ.setdefault("LOG_LEVEL", "INFO")

import extraction_indexer.config  # noqa: E402

extraction_indexer.config.reset_settings()

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from extraction_indexer.database.models import (  # noqa: E402
    Base,
    Document,
    DocumentExtraction,
    ProcessingStatus,
)
from extraction_indexer.database.session import create_session_factory  # noqa: E402
from extraction_indexer.models.chunk import TextChunk  # noqa: E402
from extraction_indexer.utils.errors import ProviderError  # noqa: E402

# Test database URL (in-memory SQLite for unit tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

EMBEDDING_DIMENSION = 3


@pytest.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
def add_document(session_factory):
    """Insert a document (and optionally its extraction) into the test database."""

    async def _add(
        document_id: str,
        extracted_data=None,
        status: ProcessingStatus = ProcessingStatus.COMPLETED,
        uploaded_at=None,
        with_extraction: bool = True,
    ) -> None:
        async with session_factory() as session:
            async with session.begin():
                document = Document(id=document_id, status=status)
                if uploaded_at is not None:
                    document.uploaded_at = uploaded_at
                session.add(document)
                if with_extraction:
                    session.add(
                        DocumentExtraction(document_id=document_id, extracted_data=extracted_data)
                    )

    return _add


def _make_chunks(*texts: str) -> List[TextChunk]:
    """Build TextChunks for *texts* with positions in order."""
    return [
        TextChunk(position=index, text=text, token_count=max(1, len(text) // 4))
        for index, text in enumerate(texts)
    ]


def _vector_for(index: int) -> List[float]:
    """A distinct, exactly representable vector per index."""
    return [float(index), 0.5, 0.25]


class FakeEmbedder:
    """In-memory embedding provider that records every batch it receives."""

    def __init__(self, fail_for: Sequence[str] = ()):
        self.calls: List[List[str]] = []
        self.fail_for = set(fail_for)

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        batch = list(texts)
        self.calls.append(batch)
        if any(marker in text for text in batch for marker in self.fail_for):
            raise ProviderError("provider unavailable", model="fake")
        return [_vector_for(index) for index in range(len(batch))]


@pytest.fixture
def fake_embedder():
    """Embedding provider that never leaves the process."""
    return FakeEmbedder()


def _embedding_response(*items):
    return SimpleNamespace(
        data=[SimpleNamespace(index=index, embedding=vector) for index, vector in items]
    )


@pytest.fixture
def make_chunks():
    """Factory for TextChunks with positions in order."""
    return _make_chunks


@pytest.fixture
def vector_for():
    """Factory for a distinct, exactly representable vector per index."""
    return _vector_for


@pytest.fixture
def embedding_response():
    """Factory for OpenAI-shaped embeddings responses from ``(index, vector)`` pairs."""
    return _embedding_response


@pytest.fixture
def mock_openai_client():
    """Mock AsyncOpenAI client exposing ``embeddings.create``."""
    client = SimpleNamespace(embeddings=SimpleNamespace(create=AsyncMock()))
    return client


@pytest.fixture
def mock_db_session():
    """Mock async database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session
