from __future__ import annotations

from pydantic import BaseModel


class Answer(BaseModel):
    question_uuid: str
    content: str


class AnswerDetail(BaseModel):
    answer_uuid: str
    question_uuid: str
    content: str
    created_at: str


class AnswerId(BaseModel):
    answer_uuid: str
