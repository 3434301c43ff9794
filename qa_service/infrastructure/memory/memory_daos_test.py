"""Tests for the in-memory DAOs."""
from __future__ import annotations

import uuid

import pytest

from qa_service.conftest import UNKNOWN_UUID, make_answer, make_question
from qa_service.domain.errors import InvalidUUIDError, StorageError


class TestInMemoryQuestionsDao:
    @pytest.mark.asyncio
    async def test_create_then_list(self, memory_questions_dao):
        created = await memory_questions_dao.create_question(make_question(title="T", description="D"))

        questions = await memory_questions_dao.get_questions()

        assert questions == [created]
        uuid.UUID(created.question_uuid)
        assert created.created_at

    @pytest.mark.asyncio
    async def test_delete_unknown_is_not_an_error(self, memory_questions_dao):
        await memory_questions_dao.delete_question(UNKNOWN_UUID)

    @pytest.mark.asyncio
    async def test_delete_malformed_is_invalid_uuid(self, memory_questions_dao):
        with pytest.raises(InvalidUUIDError):
            await memory_questions_dao.delete_question("nope")

    @pytest.mark.asyncio
    async def test_delete_removes_question(self, memory_questions_dao):
        created = await memory_questions_dao.create_question(make_question())

        await memory_questions_dao.delete_question(created.question_uuid)

        assert await memory_questions_dao.get_questions() == []

    @pytest.mark.asyncio
    async def test_delete_question_with_answers_is_storage_error(
        self, memory_questions_dao, memory_answers_dao
    ):
        question = await memory_questions_dao.create_question(make_question())
        await memory_answers_dao.create_answer(make_answer(question.question_uuid))

        with pytest.raises(StorageError):
            await memory_questions_dao.delete_question(question.question_uuid)


class TestInMemoryAnswersDao:
    @pytest.mark.asyncio
    async def test_create_for_unknown_question_is_question_not_found(self, memory_answers_dao):
        with pytest.raises(InvalidUUIDError) as exc_info:
            await memory_answers_dao.create_answer(make_answer(UNKNOWN_UUID))

        assert exc_info.value.detail == "Question not found"

    @pytest.mark.asyncio
    async def test_get_answers_is_scoped(self, memory_questions_dao, memory_answers_dao):
        q1 = await memory_questions_dao.create_question(make_question())
        q2 = await memory_questions_dao.create_question(make_question())
        a1 = await memory_answers_dao.create_answer(make_answer(q1.question_uuid))
        await memory_answers_dao.create_answer(make_answer(q2.question_uuid))

        assert await memory_answers_dao.get_answers(q1.question_uuid) == [a1]

    @pytest.mark.asyncio
    async def test_get_answers_empty(self, memory_answers_dao):
        assert await memory_answers_dao.get_answers(UNKNOWN_UUID) == []

    @pytest.mark.asyncio
    async def test_delete_answer_is_idempotent(self, memory_questions_dao, memory_answers_dao):
        q = await memory_questions_dao.create_question(make_question())
        a = await memory_answers_dao.create_answer(make_answer(q.question_uuid))

        await memory_answers_dao.delete_answer(a.answer_uuid)
        await memory_answers_dao.delete_answer(a.answer_uuid)

        assert await memory_answers_dao.get_answers(q.question_uuid) == []

    @pytest.mark.asyncio
    async def test_malformed_uuids_are_invalid_uuid(self, memory_answers_dao):
        with pytest.raises(InvalidUUIDError):
            await memory_answers_dao.get_answers("nope")
        with pytest.raises(InvalidUUIDError):
            await memory_answers_dao.delete_answer("nope")
