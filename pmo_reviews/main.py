"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from pmo_reviews.api.deps import ServiceContainer
from pmo_reviews.api.v1 import auth, departments, health, questions, reports, reviews, zones
from pmo_reviews.core.config import settings
from pmo_reviews.core.constants import API_PREFIX
from pmo_reviews.core.exceptions import PMOReviewError
from pmo_reviews.core.logging import get_logger, setup_logging

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(
        "Starting PMO review tracker",
        app_name=settings.app_name,
        env=settings.app_env,
    )
    app.state.container.initialize()

    yield

    logger.info("Shutting down PMO review tracker")
    await app.state.container.close()


async def app_error_handler(request: Request, exc: PMOReviewError) -> JSONResponse:
    """Handle custom application errors."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application error",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError | PydanticValidationError,
) -> JSONResponse:
    """Malformed request bodies and invalid field values are client errors."""
    errors = jsonable_errors(exc.errors())
    logger.warning("Validation failed", path=request.url.path, error_count=len(errors))
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation failed",
            "code": "VALIDATION_ERROR",
            "details": errors,
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors. The message is returned, the traceback is not."""
    logger.exception(
        "Unexpected error",
        error=str(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
            "details": str(exc),
        },
    )


def jsonable_errors(errors: Any) -> list[dict[str, Any]]:
    """Keep only the serializable parts of pydantic error entries."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in errors
    ]


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Build the application.

    Args:
        container: Service container to attach; a default one is built from settings
    """
    app = FastAPI(
        title="PMO Review Tracker API",
        description="Site-visit review tracking with AI-generated PMO summary reports",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.container = container or ServiceContainer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PMOReviewError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PydanticValidationError, validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
    app.include_router(auth.router, prefix=API_PREFIX, tags=["Auth"])
    app.include_router(zones.router, prefix=API_PREFIX, tags=["Zones"])
    app.include_router(departments.router, prefix=API_PREFIX, tags=["Departments"])
    app.include_router(questions.router, prefix=API_PREFIX, tags=["Questions"])
    app.include_router(reviews.router, prefix=API_PREFIX, tags=["Reviews"])
    app.include_router(reports.router, prefix=API_PREFIX, tags=["Reports"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": "1.0.0",
            "docs": "/docs" if settings.debug else "Disabled in production",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pmo_reviews.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
