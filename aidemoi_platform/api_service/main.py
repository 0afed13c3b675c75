"""
Aide Moi API - users, companies and JWT sessions
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from .auth import TokenService
from .config import Settings, get_settings
from .db import build_engine, build_session_factory, init_db
from .errors import setup_exception_handlers
from .routes import api, health
from .utils.log_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup"""
    init_db(app.state.engine)
    yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own database engine, token service and rate limiter."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API for users, companies and JWT authentication",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting applies the default limit to every route
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.RATE_LIMIT],
        enabled=settings.RATE_LIMIT_ENABLED,
    )
    app.add_middleware(SlowAPIMiddleware)

    setup_exception_handlers(app, debug=settings.is_development)

    # Signing key is read once here; rotating it invalidates every issued token
    app.state.token_service = TokenService.from_settings(settings)
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    app.include_router(health.router)
    app.include_router(api.router)

    @app.get("/", tags=["api"])
    def root():
        """Root endpoint"""
        return {"message": settings.APP_NAME, "version": settings.APP_VERSION, "docs": "/docs"}

    logger.info("Application created: environment=%s", settings.ENVIRONMENT)
    return app


app = create_app()
