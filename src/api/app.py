from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
from .middleware import trace_requests
import logging

logger = logging.getLogger(__name__)


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", "N/A")


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"[TraceID: {_trace_id(request)}] Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(
        f"[TraceID: {_trace_id(request)}] Server error: {exc.base_error.code} "
        f"{exc.base_error.message}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    error_dict = {"code": "VALIDATION_ERROR", "message": "; ".join(details)}
    logger.warning(f"[TraceID: {_trace_id(request)}] Validation error: {error_dict}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES_ON_STARTUP:
            from src.depends import engine
            # Import all entities so they're registered with SQLModel.metadata
            from src.domain import entities  # noqa: F401

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield

    app = FastAPI(
        title=ApplicationConfig.APP_NAME,
        version=ApplicationConfig.APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(trace_requests)

    from src.api.routes import auth, health_check, movie_sessions, movies, tickets, users

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(movies.router, prefix=prefix, tags=["Movies"])
    app.include_router(movie_sessions.router, prefix=prefix, tags=["Movie Sessions"])
    app.include_router(tickets.router, prefix=prefix, tags=["Tickets"])
    app.include_router(users.router, prefix=prefix, tags=["Users"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
