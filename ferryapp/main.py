"""
Ferry Operator Network API

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ferryapp.api.exception_handlers import setup_exception_handlers
from ferryapp.api.middleware.request_id import RequestIdMiddleware
from ferryapp.api.v1 import router as api_router
from ferryapp.config import get_settings
from ferryapp.database import close_db, init_db
from ferryapp.kernel.identity.jwt import TokenService
from ferryapp.logging_config import configure_logging, get_logger
from ferryapp.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    Ferry Operator Network API

    Identity and access for the ferry operator network: companies, their
    employees and the administrators that register them.

    ## Features

    - **Login**: login name + password exchanged for a 24h bearer token
    - **Paired registration**: a company or employee is created together with its login
    - **Account administration**: activation, password and login name changes
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# One signer for the whole process
app.state.token_service = TokenService.from_settings(settings)

# LAST added = OUTERMOST; CORS wraps everything so error responses carry its headers too
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(status="ok", version=settings.version)


app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ferryapp.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
