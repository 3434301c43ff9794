from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from qa_service.application.answers import handlers as answers
from qa_service.application.questions import handlers as questions
from qa_service.container import get_answers_dao, get_questions_dao
from qa_service.domain.models.answer import Answer, AnswerDetail, AnswerId
from qa_service.domain.models.question import Question, QuestionDetail, QuestionId
from qa_service.domain.ports.answers_dao import AnswersDao
from qa_service.domain.ports.questions_dao import QuestionsDao

router = APIRouter()

_ERROR_RESPONSES = {
    400: {
        "description": "Empty required field or malformed UUID",
        "content": {"application/json": {"example": {"detail": "Invalid question UUID"}}},
    },
    500: {"description": "Storage failure"},
}


@router.post(
    "/question",
    tags=["questions"],
    summary="Create a question",
    response_model=QuestionDetail,
    responses={
        200: {
            "description": "Question created",
            "content": {
                "application/json": {
                    "example": {
                        "question_uuid": "550e8400-e29b-41d4-a716-446655440000",
                        "title": "How do I read a file?",
                        "description": "Line by line, without loading it all.",
                        "created_at": "2025-06-15T12:00:00+00:00",
                    }
                }
            },
        },
        **_ERROR_RESPONSES,
    },
)
async def create_question(
    body: Question,
    dao: QuestionsDao = Depends(get_questions_dao),
):
    return await questions.create_question(dao, body)


@router.get(
    "/questions",
    tags=["questions"],
    summary="List all questions",
    description="Returns every stored question. No ordering is guaranteed.",
    response_model=list[QuestionDetail],
    responses={500: _ERROR_RESPONSES[500]},
)
async def read_questions(dao: QuestionsDao = Depends(get_questions_dao)):
    return await questions.read_questions(dao)


@router.delete(
    "/question",
    tags=["questions"],
    summary="Delete a question",
    description="""
Delete a question by its UUID.

Deleting an identifier that matches no question still succeeds. A question
that still has answers cannot be deleted; remove its answers first.
    """,
    responses={200: {"description": "Question deleted (or did not exist)"}, **_ERROR_RESPONSES},
)
async def delete_question(
    body: QuestionId,
    dao: QuestionsDao = Depends(get_questions_dao),
):
    await questions.delete_question(dao, body)
    return Response(status_code=200)


@router.post(
    "/answer",
    tags=["answers"],
    summary="Answer a question",
    description="""
Create an answer for an existing question.

A well-formed `question_uuid` that matches no question is reported as 500.
    """,
    response_model=AnswerDetail,
    responses=_ERROR_RESPONSES,
)
async def create_answer(
    body: Answer,
    dao: AnswersDao = Depends(get_answers_dao),
):
    return await answers.create_answer(dao, body)


@router.get(
    "/answers",
    tags=["answers"],
    summary="List the answers of a question",
    description="Takes the question identifier as a JSON body. Returns `[]` when the question has no answers.",
    response_model=list[AnswerDetail],
    responses=_ERROR_RESPONSES,
)
async def read_answers(
    body: QuestionId,
    dao: AnswersDao = Depends(get_answers_dao),
):
    return await answers.read_answers(dao, body)


@router.delete(
    "/answer",
    tags=["answers"],
    summary="Delete an answer",
    responses={200: {"description": "Answer deleted (or did not exist)"}, **_ERROR_RESPONSES},
)
async def delete_answer(
    body: AnswerId,
    dao: AnswersDao = Depends(get_answers_dao),
):
    await answers.delete_answer(dao, body)
    return Response(status_code=200)
