"""Shared test fixtures for the qa_service package."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import StaticPool

from qa_service.domain.models.answer import Answer
from qa_service.domain.models.question import Question
from qa_service.infrastructure.db.daos.answers_dao_sql import SqlAnswersDao
from qa_service.infrastructure.db.daos.questions_dao_sql import SqlQuestionsDao
from qa_service.infrastructure.db.engine import build_engine, create_schema, drop_schema
from qa_service.infrastructure.memory.daos import (
    InMemoryAnswersDao,
    InMemoryQuestionsDao,
    InMemoryStore,
)

# One shared in-memory SQLite connection per test, foreign keys enforced
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

UNKNOWN_UUID = "6f1c2a4e-0000-4000-8000-000000000000"


def make_question(**overrides) -> Question:
    """Factory for question payloads with sensible defaults."""
    defaults = dict(title="How do I read a file?", description="Line by line.")
    defaults.update(overrides)
    return Question(**defaults)


def make_answer(question_uuid: str, **overrides) -> Answer:
    defaults = dict(question_uuid=question_uuid, content="Use a with-block.")
    defaults.update(overrides)
    return Answer(**defaults)


@pytest.fixture
def mock_dao():
    """Async mock DAO for handler unit tests."""
    return AsyncMock()


@pytest.fixture
async def test_engine():
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await create_schema(engine)
    yield engine
    await drop_schema(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
def questions_dao(session_factory) -> SqlQuestionsDao:
    return SqlQuestionsDao(session_factory)


@pytest.fixture
def answers_dao(session_factory) -> SqlAnswersDao:
    return SqlAnswersDao(session_factory)


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def memory_questions_dao(memory_store) -> InMemoryQuestionsDao:
    return InMemoryQuestionsDao(memory_store)


@pytest.fixture
def memory_answers_dao(memory_store) -> InMemoryAnswersDao:
    return InMemoryAnswersDao(memory_store)
