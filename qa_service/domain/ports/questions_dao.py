from __future__ import annotations

import abc

from qa_service.domain.models.question import Question, QuestionDetail


class QuestionsDao(abc.ABC):
    @abc.abstractmethod
    async def create_question(self, question: Question) -> QuestionDetail: ...

    @abc.abstractmethod
    async def get_questions(self) -> list[QuestionDetail]: ...

    @abc.abstractmethod
    async def delete_question(self, question_uuid: str) -> None: ...
