"""Integration tests for SqlQuestionsDao using SQLite."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from qa_service.conftest import UNKNOWN_UUID, make_answer, make_question
from qa_service.domain.errors import InvalidUUIDError, StorageError
from qa_service.infrastructure.db.daos.questions_dao_sql import SqlQuestionsDao


class TestCreateQuestion:
    @pytest.mark.asyncio
    async def test_returns_generated_fields(self, questions_dao):
        detail = await questions_dao.create_question(make_question(title="T", description="D"))

        assert detail.title == "T"
        assert detail.description == "D"
        uuid.UUID(detail.question_uuid)
        assert detail.created_at

    @pytest.mark.asyncio
    async def test_generates_distinct_identifiers(self, questions_dao):
        first = await questions_dao.create_question(make_question())
        second = await questions_dao.create_question(make_question())

        assert first.question_uuid != second.question_uuid

    @pytest.mark.asyncio
    async def test_created_at_is_utc_with_offset(self, questions_dao):
        detail = await questions_dao.create_question(make_question())

        assert datetime.fromisoformat(detail.created_at).utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_store_failure_is_storage_error(self, test_engine, session_factory):
        from qa_service.infrastructure.db.engine import drop_schema

        await drop_schema(test_engine)
        dao = SqlQuestionsDao(session_factory)

        with pytest.raises(StorageError) as exc_info:
            await dao.create_question(make_question())

        assert isinstance(exc_info.value.cause, OperationalError)


class TestGetQuestions:
    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, questions_dao):
        assert await questions_dao.get_questions() == []

    @pytest.mark.asyncio
    async def test_round_trip(self, questions_dao):
        created = await questions_dao.create_question(make_question(title="T", description="D"))

        questions = await questions_dao.get_questions()

        match = [q for q in questions if q.question_uuid == created.question_uuid]
        assert len(match) == 1
        assert match[0].title == "T"
        assert match[0].description == "D"
        assert match[0].created_at

    @pytest.mark.asyncio
    async def test_returns_every_question(self, questions_dao):
        for i in range(3):
            await questions_dao.create_question(make_question(title=f"Q{i}"))

        questions = await questions_dao.get_questions()

        assert sorted(q.title for q in questions) == ["Q0", "Q1", "Q2"]


class TestDeleteQuestion:
    @pytest.mark.asyncio
    async def test_removes_question(self, questions_dao):
        created = await questions_dao.create_question(make_question())

        await questions_dao.delete_question(created.question_uuid)

        assert await questions_dao.get_questions() == []

    @pytest.mark.asyncio
    async def test_only_removes_matching_question(self, questions_dao):
        keep = await questions_dao.create_question(make_question(title="keep"))
        drop = await questions_dao.create_question(make_question(title="drop"))

        await questions_dao.delete_question(drop.question_uuid)

        remaining = await questions_dao.get_questions()
        assert [q.question_uuid for q in remaining] == [keep.question_uuid]

    @pytest.mark.asyncio
    async def test_unknown_question_is_not_an_error(self, questions_dao):
        await questions_dao.delete_question(UNKNOWN_UUID)

    @pytest.mark.asyncio
    async def test_malformed_uuid_is_invalid_uuid(self, questions_dao):
        with pytest.raises(InvalidUUIDError):
            await questions_dao.delete_question("not-a-uuid")

    @pytest.mark.asyncio
    async def test_question_with_answers_is_rejected_by_store(self, questions_dao, answers_dao):
        question = await questions_dao.create_question(make_question())
        await answers_dao.create_answer(make_answer(question.question_uuid))

        with pytest.raises(StorageError):
            await questions_dao.delete_question(question.question_uuid)

        assert len(await questions_dao.get_questions()) == 1
