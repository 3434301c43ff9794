"""In-memory DAO implementations.

They honour the same contract as the SQL DAOs, foreign key included, and
back the ``STORAGE_BACKEND=memory`` mode as well as the unit tests.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

import structlog

from qa_service.domain.errors import InvalidUUIDError, StorageError
from qa_service.domain.identifiers import parse_uuid
from qa_service.domain.models.answer import Answer, AnswerDetail
from qa_service.domain.models.question import Question, QuestionDetail
from qa_service.domain.ports.answers_dao import AnswersDao
from qa_service.domain.ports.questions_dao import QuestionsDao

log = structlog.stdlib.get_logger()


class ForeignKeyViolation(Exception):
    pass


@dataclass
class InMemoryStore:
    questions: dict[uuid.UUID, QuestionDetail] = field(default_factory=dict)
    answers: dict[uuid.UUID, AnswerDetail] = field(default_factory=dict)

    def has_answers(self, question_uuid: uuid.UUID) -> bool:
        key = str(question_uuid)
        return any(a.question_uuid == key for a in self.answers.values())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InMemoryQuestionsDao(QuestionsDao):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create_question(self, question: Question) -> QuestionDetail:
        question_uuid = uuid.uuid4()
        detail = QuestionDetail(
            question_uuid=str(question_uuid),
            title=question.title,
            description=question.description,
            created_at=_now(),
        )
        self._store.questions[question_uuid] = detail
        return detail

    async def get_questions(self) -> list[QuestionDetail]:
        return list(self._store.questions.values())

    async def delete_question(self, question_uuid: str) -> None:
        uuid_ = parse_uuid(question_uuid)
        if self._store.has_answers(uuid_):
            raise StorageError(
                ForeignKeyViolation(f"question {uuid_} is still referenced by answers")
            )
        self._store.questions.pop(uuid_, None)


class InMemoryAnswersDao(AnswersDao):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        question_uuid = parse_uuid(answer.question_uuid)
        if question_uuid not in self._store.questions:
            log.info("memory.create_answer.question_not_found", question_uuid=answer.question_uuid)
            raise InvalidUUIDError("Question not found")
        answer_uuid = uuid.uuid4()
        detail = AnswerDetail(
            answer_uuid=str(answer_uuid),
            question_uuid=str(question_uuid),
            content=answer.content,
            created_at=_now(),
        )
        self._store.answers[answer_uuid] = detail
        return detail

    async def delete_answer(self, answer_uuid: str) -> None:
        self._store.answers.pop(parse_uuid(answer_uuid), None)

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        key = str(parse_uuid(question_uuid))
        return [a for a in self._store.answers.values() if a.question_uuid == key]
