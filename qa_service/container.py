from __future__ import annotations

import os

from dependency_injector import containers, providers
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import async_sessionmaker

from qa_service.domain.ports.answers_dao import AnswersDao
from qa_service.domain.ports.questions_dao import QuestionsDao
from qa_service.infrastructure.db.daos.answers_dao_sql import SqlAnswersDao
from qa_service.infrastructure.db.daos.questions_dao_sql import SqlQuestionsDao
from qa_service.infrastructure.db.engine import build_engine
from qa_service.infrastructure.memory.daos import (
    InMemoryAnswersDao,
    InMemoryQuestionsDao,
    InMemoryStore,
)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


# Enable SQL query logging with LOG_LEVEL=DEBUG and SQL_ECHO=true
SQL_ECHO = _env_flag("SQL_ECHO")
# "sql" talks to DATABASE_URL, "memory" keeps everything in process
STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "sql").lower()
STORAGE_BACKENDS = ("sql", "memory")
# Create missing tables from the ORM metadata at startup
DB_CREATE_SCHEMA = _env_flag("DB_CREATE_SCHEMA")


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
            "qa_service.container",
            "qa_service.infrastructure.web.routes",
        ],
    )

    config = providers.Configuration()

    engine = providers.Singleton(build_engine, config.database_url, echo=SQL_ECHO)
    session_factory = providers.Singleton(
        async_sessionmaker, engine, expire_on_commit=False
    )
    memory_store = providers.Singleton(InMemoryStore)

    questions_dao = providers.Selector(
        config.storage_backend,
        sql=providers.Singleton(SqlQuestionsDao, session_factory),
        memory=providers.Singleton(InMemoryQuestionsDao, memory_store),
    )
    answers_dao = providers.Selector(
        config.storage_backend,
        sql=providers.Singleton(SqlAnswersDao, session_factory),
        memory=providers.Singleton(InMemoryAnswersDao, memory_store),
    )


@inject
async def get_questions_dao(
    dao: QuestionsDao = Depends(Provide[Container.questions_dao]),
) -> QuestionsDao:
    return dao


@inject
async def get_answers_dao(
    dao: AnswersDao = Depends(Provide[Container.answers_dao]),
) -> AnswersDao:
    return dao
