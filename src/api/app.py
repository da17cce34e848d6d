"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload --port 3001

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 3001

    # Or use the convenience function
    from api.app import create_app
    app = create_app()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import get_catalog, get_preference_store
from config.settings import get_settings
from core.logging import configure_from_settings, get_logger
from core.middleware import RequestTracingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Startup configures logging, loads the catalog and connects the
    preference store (falling back to memory if Redis is unreachable).
    Dependency overrides are honoured so tests can start the app offline.
    """
    settings = get_settings()

    configure_from_settings(settings)

    catalog = app.dependency_overrides.get(get_catalog, get_catalog)()
    store = app.dependency_overrides.get(get_preference_store, get_preference_store)()

    logger.info(
        "Starting shopping assistant API",
        environment=settings.environment,
        port=settings.port,
        products=len(catalog),
        preference_backend=store.backend_name,
    )

    yield

    logger.info("Shutting down shopping assistant API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title="Shopping Assistant API",
        description="""
        Conversational shopping assistant.

        ## Main Endpoints

        - `/api/chat` - Chat: greetings, wishlist, product search
        - `/api/search` - Filtered search with extracted filters
        - `/api/preference` - Like / dislike / save a product
        - `/api/wishlist/{userId}` - Saved products
        - `/api/payment/*` - Order creation and verification

        ## Health Checks

        - `/health`, `/health/detailed`, `/ready`, `/live`
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (order matters - first added = outermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (adds X-Request-ID, logs timing)
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router)

    from api.routes.chat import router as chat_router
    app.include_router(chat_router)

    from api.routes.preferences import router as preferences_router
    app.include_router(preferences_router)

    from api.routes.payments import router as payments_router
    app.include_router(payments_router)

    return app


# Create default app instance for uvicorn
# Usage: uvicorn api.app:app
app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("api.app:app", host=settings.host, port=settings.port)


# Run with: python -m api.app
if __name__ == "__main__":
    main()
