import logging
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from termuxkit.api import command, contacts, health, tools
from termuxkit.config import settings
from termuxkit.core.errors import ErrorKind, TermuxError
from termuxkit.schemas.command import ErrorResponse

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
    ),
)

if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, traces_sample_rate=0.2, environment=settings.environment)

ERROR_STATUS = {
    ErrorKind.invalid_input: 422,
    ErrorKind.collaborator_error: 502,
    ErrorKind.empty_address_book: 404,
    ErrorKind.not_found: 404,
    ErrorKind.selection_cancelled: 409,
    ErrorKind.input_cancelled: 409,
    ErrorKind.no_messages: 404,
    ErrorKind.authentication_failed: 401,
    ErrorKind.no_speech: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    log = structlog.get_logger()
    log.info(
        "Starting termuxkit",
        environment=settings.environment,
        bin_dir=settings.termux_bin_dir or "PATH",
        auth=bool(settings.api_token),
    )
    yield


app = FastAPI(
    title="termuxkit",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(TermuxError)
async def termux_error_handler(request: Request, exc: TermuxError) -> JSONResponse:
    structlog.get_logger().warning(
        "api.termux_error", path=request.url.path, kind=exc.kind, error=exc.message
    )
    body = ErrorResponse(kind=exc.kind, message=exc.message, details=exc.details)
    return JSONResponse(status_code=ERROR_STATUS.get(exc.kind, 500), content=body.model_dump(mode="json"))


app.include_router(health.router)
app.include_router(tools.router, prefix="/tools", tags=["tools"])
app.include_router(command.router, prefix="/command", tags=["command"])
app.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
