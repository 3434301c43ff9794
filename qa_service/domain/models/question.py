from __future__ import annotations

from pydantic import BaseModel


class Question(BaseModel):
    title: str
    description: str


class QuestionDetail(BaseModel):
    question_uuid: str
    title: str
    description: str
    created_at: str


class QuestionId(BaseModel):
    question_uuid: str
