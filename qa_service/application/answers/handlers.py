from __future__ import annotations

from qa_service.application.errors import BadRequest, InternalError
from qa_service.application.validation import require_field, require_uuid
from qa_service.domain.errors import DBError
from qa_service.domain.models.answer import Answer, AnswerDetail, AnswerId
from qa_service.domain.models.question import QuestionId
from qa_service.domain.ports.answers_dao import AnswersDao
from qa_service.infrastructure.timing import log_execution


def _extract_answer_context(dao, answer: Answer) -> dict:
    return {"question_uuid": answer.question_uuid}


def _extract_question_id(dao, body: QuestionId) -> dict:
    return {"question_uuid": body.question_uuid}


def _extract_answer_id(dao, body: AnswerId) -> dict:
    return {"answer_uuid": body.answer_uuid}


@log_execution("handler.create_answer", _extract_answer_context, expected=(BadRequest,))
async def create_answer(dao: AnswersDao, answer: Answer) -> AnswerDetail:
    require_field(answer.content, "Content is required")
    require_uuid(answer.question_uuid, "Invalid question UUID")
    try:
        return await dao.create_answer(answer)
    except DBError as e:
        # Includes "Question not found" from the foreign-key check
        raise InternalError(str(e)) from e


@log_execution("handler.read_answers", _extract_question_id, expected=(BadRequest,))
async def read_answers(dao: AnswersDao, body: QuestionId) -> list[AnswerDetail]:
    require_field(body.question_uuid, "Question UUID is required")
    require_uuid(body.question_uuid, "Invalid question UUID")
    try:
        return await dao.get_answers(body.question_uuid)
    except DBError as e:
        raise InternalError(str(e)) from e


@log_execution("handler.delete_answer", _extract_answer_id, expected=(BadRequest,))
async def delete_answer(dao: AnswersDao, body: AnswerId) -> None:
    require_field(body.answer_uuid, "Answer UUID is required")
    require_uuid(body.answer_uuid, "Invalid answer UUID")
    try:
        await dao.delete_answer(body.answer_uuid)
    except DBError as e:
        raise InternalError(str(e)) from e
