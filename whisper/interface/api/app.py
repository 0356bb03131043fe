"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whisper.config import Settings
from whisper.interface.api.routes import (
    accounts,
    admins,
    auth,
    categories,
    health,
    leaderboard,
    messages,
    reactions,
    recipients,
    replies,
)
from whisper.util.di.container import create_container, setup_di
from whisper.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when None

    Raises:
        ConfigurationError: If production settings are unsafe
    """
    settings = Settings()
    settings.ensure_production_ready()

    app_instance = FastAPI(
        title="Whisper API",
        description="Backend API for Whisper - an anonymous message board with moderated private messages",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(messages.router)
    app_instance.include_router(replies.router)
    app_instance.include_router(reactions.router)
    app_instance.include_router(recipients.router)
    app_instance.include_router(admins.router)
    app_instance.include_router(accounts.router)
    app_instance.include_router(leaderboard.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
