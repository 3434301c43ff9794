from __future__ import annotations

from qa_service.application.errors import BadRequest, InternalError
from qa_service.application.validation import require_field, require_uuid
from qa_service.domain.errors import DBError
from qa_service.domain.models.question import Question, QuestionDetail, QuestionId
from qa_service.domain.ports.questions_dao import QuestionsDao
from qa_service.infrastructure.timing import log_execution


def _extract_question_id(dao, body: QuestionId) -> dict:
    return {"question_uuid": body.question_uuid}


@log_execution("handler.create_question", expected=(BadRequest,))
async def create_question(dao: QuestionsDao, question: Question) -> QuestionDetail:
    require_field(question.title, "Title is required")
    require_field(question.description, "Description is required")
    try:
        return await dao.create_question(question)
    except DBError as e:
        raise InternalError(str(e)) from e


@log_execution("handler.read_questions")
async def read_questions(dao: QuestionsDao) -> list[QuestionDetail]:
    try:
        return await dao.get_questions()
    except DBError as e:
        raise InternalError(str(e)) from e


@log_execution("handler.delete_question", _extract_question_id, expected=(BadRequest,))
async def delete_question(dao: QuestionsDao, body: QuestionId) -> None:
    require_field(body.question_uuid, "Question UUID is required")
    require_uuid(body.question_uuid, "Invalid question UUID")
    try:
        await dao.delete_question(body.question_uuid)
    except DBError as e:
        raise InternalError(str(e)) from e
