from __future__ import annotations

import abc

from qa_service.domain.models.answer import Answer, AnswerDetail


class AnswersDao(abc.ABC):
    """Data access for answers. Every operation is scoped to a parent question."""

    @abc.abstractmethod
    async def create_answer(self, answer: Answer) -> AnswerDetail: ...

    @abc.abstractmethod
    async def delete_answer(self, answer_uuid: str) -> None: ...

    @abc.abstractmethod
    async def get_answers(self, question_uuid: str) -> list[AnswerDetail]: ...
