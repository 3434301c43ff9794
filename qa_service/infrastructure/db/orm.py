from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utc_isoformat(value: datetime) -> str:
    """Render a stored timestamp as UTC ISO 8601 with an explicit offset.

    SQLite hands back naive values (its CURRENT_TIMESTAMP is UTC), PostgreSQL
    hands back aware ones in the session time zone.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc).isoformat()
    return value.astimezone(timezone.utc).isoformat()


class QuestionRow(Base):
    """ORM model for questions.

    ``question_uuid`` is generated on insert and ``created_at`` is assigned by
    the store. ``eager_defaults`` makes the flush fetch the server-generated
    timestamp so a row is complete as soon as it is inserted.
    """

    __tablename__ = "questions"

    question_uuid: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __mapper_args__ = {"eager_defaults": True}


class AnswerRow(Base):
    """ORM model for answers.

    Every answer references exactly one question. The foreign key has no
    ON DELETE action, so the store rejects deleting a question that still has
    answers.
    """

    __tablename__ = "answers"

    answer_uuid: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    question_uuid: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("questions.question_uuid"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_answers_question_uuid", "question_uuid"),
    )

    __mapper_args__ = {"eager_defaults": True}
