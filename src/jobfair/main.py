"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobfair.api import api_router
from jobfair.config import get_settings
from jobfair.exceptions import ServiceError
from jobfair.logging_config import configure_logging, sanitize_log_data

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)
    settings.storage_dir.mkdir(parents=True, exist_ok=True)
    logger.info(
        "starting_application",
        **sanitize_log_data(
            {
                "env": settings.app_env,
                "database_url": settings.database_url,
                "storage_dir": str(settings.storage_dir),
            }
        ),
    )

    yield

    logger.info("shutting_down_application")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render service errors as ``{"detail": message}``."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "service_error",
        error=type(exc).__name__,
        status_code=exc.status_code,
        path=request.url.path,
        detail=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Job fair platform API: events, company booths, jobs and applications",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "jobfair.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
