import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from publisher_api.core import config, db
from publisher_api.core.errors import AppError, ErrorKind
from publisher_api.core.logging import configure_logging
from publisher_api.core.responses import FieldError, error_body
from publisher_api.publishers import router as publishers_router
from publisher_api.publishers.repository import PublisherRepository

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error."


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    # Initialize the DB pool once per process.
    pool = await db.init_pool()
    try:
        await PublisherRepository(pool, timeout_s=config.db_command_timeout_s()).ensure_schema()
        yield
    finally:
        await db.close_pool()


async def handle_app_error(_: Request, exc: AppError) -> JSONResponse:
    status_code = _STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    message = exc.message if status_code < 500 else INTERNAL_ERROR_MESSAGE
    return JSONResponse(status_code=status_code, content=error_body(message))


async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = []
    for err in exc.errors():
        # loc looks like ("body", "name"); the leading section is noise for clients.
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        field_errors.append(FieldError(field=".".join(loc) or "body", message=str(err.get("msg", ""))))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request.", field_errors),
    )


async def handle_http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_ERROR_MESSAGE),
    )


def create_app() -> FastAPI:
    app = FastAPI(lifespan=lifespan)

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(publishers_router.router, tags=["publishers"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "publisher api"}

    return app


app = create_app()
