from __future__ import annotations

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_service.domain.errors import StorageError
from qa_service.domain.identifiers import parse_uuid
from qa_service.domain.models.question import Question, QuestionDetail
from qa_service.domain.ports.questions_dao import QuestionsDao
from qa_service.infrastructure.db.orm import QuestionRow, utc_isoformat
from qa_service.infrastructure.timing import timed_operation

log = structlog.stdlib.get_logger()


class SqlQuestionsDao(QuestionsDao):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_question(self, question: Question) -> QuestionDetail:
        with timed_operation("db.create_question"):
            try:
                async with self._session_factory() as session:
                    row = QuestionRow(
                        title=question.title,
                        description=question.description,
                    )
                    session.add(row)
                    await session.flush()
                    detail = self._to_detail(row)
                    await session.commit()
            except SQLAlchemyError as e:
                raise StorageError(e) from e

        log.debug("db.create_question.result", question_uuid=detail.question_uuid)
        return detail

    async def get_questions(self) -> list[QuestionDetail]:
        with timed_operation("db.get_questions") as timing:
            try:
                async with self._session_factory() as session:
                    rows = (await session.execute(select(QuestionRow))).scalars().all()
                    results = [self._to_detail(r) for r in rows]
            except SQLAlchemyError as e:
                raise StorageError(e) from e

        log.debug(
            "db.get_questions.results",
            returned=len(results),
            elapsed_ms=timing.get("elapsed_ms"),
        )
        return results

    async def delete_question(self, question_uuid: str) -> None:
        uuid = parse_uuid(question_uuid)
        with timed_operation("db.delete_question", question_uuid=question_uuid):
            try:
                async with self._session_factory() as session:
                    stmt = delete(QuestionRow).where(QuestionRow.question_uuid == uuid)
                    result = await session.execute(stmt)
                    await session.commit()
            except SQLAlchemyError as e:
                raise StorageError(e) from e
        log.debug("db.delete_question.result", rows_deleted=result.rowcount)

    @staticmethod
    def _to_detail(row: QuestionRow) -> QuestionDetail:
        return QuestionDetail(
            question_uuid=str(row.question_uuid),
            title=row.title,
            description=row.description,
            created_at=utc_isoformat(row.created_at),
        )
