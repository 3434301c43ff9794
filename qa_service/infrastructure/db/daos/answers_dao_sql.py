from __future__ import annotations

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qa_service.domain.errors import InvalidUUIDError, StorageError
from qa_service.domain.identifiers import parse_uuid
from qa_service.domain.models.answer import Answer, AnswerDetail
from qa_service.domain.ports.answers_dao import AnswersDao
from qa_service.infrastructure.db.errors import is_foreign_key_violation
from qa_service.infrastructure.db.orm import AnswerRow, utc_isoformat
from qa_service.infrastructure.timing import timed_operation

log = structlog.stdlib.get_logger()


class SqlAnswersDao(AnswersDao):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_answer(self, answer: Answer) -> AnswerDetail:
        question_uuid = parse_uuid(answer.question_uuid)
        with timed_operation("db.create_answer", question_uuid=answer.question_uuid):
            try:
                async with self._session_factory() as session:
                    row = AnswerRow(question_uuid=question_uuid, content=answer.content)
                    session.add(row)
                    await session.flush()
                    detail = self._to_detail(row)
                    await session.commit()
            except DBAPIError as e:
                # The only client-caused store error: the referenced question is gone
                if is_foreign_key_violation(e):
                    log.info(
                        "db.create_answer.question_not_found",
                        question_uuid=answer.question_uuid,
                    )
                    raise InvalidUUIDError("Question not found") from e
                raise StorageError(e) from e
            except SQLAlchemyError as e:
                raise StorageError(e) from e

        log.debug("db.create_answer.result", answer_uuid=detail.answer_uuid)
        return detail

    async def delete_answer(self, answer_uuid: str) -> None:
        uuid = parse_uuid(answer_uuid)
        with timed_operation("db.delete_answer", answer_uuid=answer_uuid):
            try:
                async with self._session_factory() as session:
                    stmt = delete(AnswerRow).where(AnswerRow.answer_uuid == uuid)
                    result = await session.execute(stmt)
                    await session.commit()
            except SQLAlchemyError as e:
                raise StorageError(e) from e
        log.debug("db.delete_answer.result", rows_deleted=result.rowcount)

    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]:
        uuid = parse_uuid(question_uuid)
        with timed_operation("db.get_answers", question_uuid=question_uuid) as timing:
            try:
                async with self._session_factory() as session:
                    stmt = select(AnswerRow).where(AnswerRow.question_uuid == uuid)
                    rows = (await session.execute(stmt)).scalars().all()
                    results = [self._to_detail(r) for r in rows]
            except SQLAlchemyError as e:
                raise StorageError(e) from e

        log.debug(
            "db.get_answers.results",
            question_uuid=question_uuid,
            returned=len(results),
            elapsed_ms=timing.get("elapsed_ms"),
        )
        return results

    @staticmethod
    def _to_detail(row: AnswerRow) -> AnswerDetail:
        return AnswerDetail(
            answer_uuid=str(row.answer_uuid),
            question_uuid=str(row.question_uuid),
            content=row.content,
            created_at=utc_isoformat(row.created_at),
        )
