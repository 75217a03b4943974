"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.config import get_config
from models.errors import SearchProviderError
from server.middleware import RequestIDMiddleware
from server.routes import health, search
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    config = get_config()
    logger.info(f"Search server starting up: {config.get_model_info()}")
    if not config.validate():
        logger.warning("Invalid configuration: GOOGLE_API_KEY missing or session limits negative")

    yield

    logger.info("Search server shutting down")


def _validation_message(exc: RequestValidationError) -> str:
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        if loc:
            fields.append(".".join(loc))
    if not fields:
        return "Invalid request"
    return f"Missing or invalid fields: {', '.join(fields)}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": _validation_message(exc)},
    )


async def provider_error_handler(request: Request, exc: SearchProviderError):
    logger.error(
        "Search failed",
        extra={
            "extra_fields": {
                "request_id": getattr(request.state, "request_id", "unknown"),
                "provider": exc.provider,
                "error": exc.message,
            }
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": exc.message or "An error occurred while processing your search"},
    )


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="Grounded Search API",
        description="Web-grounded answers with citations and follow-up conversations",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SearchProviderError, provider_error_handler)

    app.include_router(health.router)
    app.include_router(search.router)

    return app
