from __future__ import annotations

import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text

from qa_service.application.errors import HandlerError
from qa_service.container import DB_CREATE_SCHEMA, STORAGE_BACKEND, STORAGE_BACKENDS, Container
from qa_service.infrastructure.db.engine import DATABASE_URL, _mask_password, create_schema
from qa_service.infrastructure.logging import setup_logging
from qa_service.infrastructure.request_context import (
    CLIENT_ID_HEADER,
    REQUEST_ID_HEADER,
    get_client_id,
    get_request_id,
    request_context,
)
from qa_service.infrastructure.web.routes import router

# Configure logging early so all logs use consistent formatting
setup_logging()
log = structlog.stdlib.get_logger()


class App:
    def __init__(
        self,
        database_url: str = DATABASE_URL,
        storage_backend: str = STORAGE_BACKEND,
        create_schema_on_startup: bool = DB_CREATE_SCHEMA,
    ) -> None:
        if storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {storage_backend!r}, expected one of {STORAGE_BACKENDS}"
            )
        self._storage_backend = storage_backend
        self._create_schema_on_startup = create_schema_on_startup

        self._container = Container()
        self._container.config.database_url.from_value(database_url)
        self._container.config.storage_backend.from_value(storage_backend)
        self._container.wire()
        log.info(
            "app.storage.configured",
            backend=storage_backend,
            url=_mask_password(database_url),
        )

        self._fastapi = FastAPI(
            title="Q&A Service",
            description="""
Q&A Service API for asking questions and answering them.

## Features

* **Questions** - Create, list and delete questions
* **Answers** - Answer a question, list a question's answers, delete answers

## Errors

Empty required fields and malformed UUIDs are rejected with `400`.
Any failure reported by the storage layer is returned as `500` with the
underlying cause in `detail`.
            """,
            version="1.0.0",
            license_info={
                "name": "MIT",
            },
            openapi_tags=[
                {
                    "name": "questions",
                    "description": "Operations on questions",
                },
                {
                    "name": "answers",
                    "description": "Operations on the answers of a question",
                },
                {
                    "name": "health",
                    "description": "Health check endpoints for monitoring",
                },
            ],
            lifespan=self._lifespan,
        )
        self._fastapi.include_router(router)
        self._fastapi.add_exception_handler(HandlerError, self._handler_error)
        self._fastapi.middleware("http")(self._logging_middleware)
        self._fastapi.get(
            "/health",
            tags=["health"],
            summary="Health check",
            response_description="Service health status",
        )(self._health_check)

    @property
    def fastapi(self) -> FastAPI:
        return self._fastapi

    @property
    def container(self) -> Container:
        return self._container

    @property
    def uses_sql_storage(self) -> bool:
        return self._storage_backend == "sql"

    async def __call__(self, scope, receive, send) -> None:
        await self._fastapi(scope, receive, send)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        if self.uses_sql_storage and self._create_schema_on_startup:
            await create_schema(self._container.engine())
            log.info("app.db.schema_created")
        log.info("app.started")
        yield
        if self.uses_sql_storage:
            await self._container.engine().dispose()
        log.info("app.shutdown")

    async def _health_check(self) -> dict:
        """Health check endpoint for Docker/Kubernetes liveness probes."""
        if self.uses_sql_storage:
            async with self._container.engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        return {"status": "healthy"}

    @staticmethod
    async def _handler_error(request: Request, exc: HandlerError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @staticmethod
    async def _logging_middleware(request: Request, call_next) -> Response:
        # Headers are case-insensitive, Starlette normalizes to lowercase
        with request_context(
            request.headers.get(REQUEST_ID_HEADER.lower()),
            request.headers.get(CLIENT_ID_HEADER.lower()),
            method=request.method,
            path=request.url.path,
        ):
            start = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                log.error(
                    "request.failed",
                    elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            if response.status_code >= 500:
                log_method = log.error
            elif response.status_code >= 400:
                log_method = log.warning
            else:
                log_method = log.info
            log_method(
                "request.completed",
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
            )

            response.headers[REQUEST_ID_HEADER] = get_request_id()
            response.headers[CLIENT_ID_HEADER] = get_client_id()
            return response
