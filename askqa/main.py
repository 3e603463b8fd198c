import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from askqa.api import endpoints

from askqa.core.config import Settings, get_settings
from askqa.core.logging import configure_logging, get_logger
from askqa.db.connection import Database
from askqa.llm.provider import LLMProvider

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(" Starting askQA API...")
    if getattr(app.state, "database", None) is None:
        app.state.database = Database.from_settings(app.state.settings)

    yield

    logger.info(" Shutting down askQA API...")
    await app.state.database.dispose()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        response: Response = await call_next(request)
        elapsed_ms = int((time.time() - start) * 1000)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms}ms)")
        return response


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or mistyped request bodies are client errors: 400, not FastAPI's 422."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    message = "; ".join(messages) or "invalid request"
    logger.warning(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"error": str(exc) or exc.__class__.__name__})


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API; settings are resolved here so a missing LLM_API_KEY stops startup."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    app = FastAPI(
        title="askQA",
        description="Natural language questions answered with LLM-generated SQL",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.llm_provider = LLMProvider(settings)
    app.state.database = database

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(endpoints.router)

    @app.get("/")
    async def root():
        return {
            "service": "Natural Language askQA",
            "version": app.version,
            "docs": "/docs",
            "health": "/health",
            "ask": "/api/askQA",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.settings.HOST, port=app.state.settings.PORT)
