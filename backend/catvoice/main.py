"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from catvoice.core.config import get_settings
from catvoice.core.logging import setup_logging

# Setup logging
logger = setup_logging("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize services at startup, clean up at shutdown."""
    settings = get_settings()
    try:
        from catvoice.services.consult import ConsultationService
        from catvoice.services.datastore import DataStore
        from catvoice.services.model_client import GeminiModelClient, ModelConfig
        from catvoice.services.translate import TranslationService

        # One stateless client shared by both pipelines
        model_client = GeminiModelClient(ModelConfig.from_settings(settings))

        app.state.translation_service = TranslationService(model_client)
        app.state.consultation_service = ConsultationService(model_client)
        app.state.datastore = DataStore(quota_timezone=settings.quota_timezone)
        logger.info("Services initialized successfully")
    except Exception as exc:
        logger.error(
            "Service initialization failed, running in degraded mode",
            exc_info=True,
            extra={"error_type": type(exc).__name__},
        )
        # Continue without services; endpoints return 503 until fixed

    yield


# Create FastAPI app
app = FastAPI(
    title="CatVoice - Cat Feeling Translator",
    description="Translates cat behavior into the cat's own words with Gemini",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=[f"http://localhost:{settings.frontend_port}"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
from catvoice.api.consult import router as consult_router  # noqa: E402
from catvoice.api.translate import router as translate_router  # noqa: E402

app.include_router(translate_router)
app.include_router(consult_router)


@app.get("/health")
async def health_check(request: Request) -> dict:
    """Health check endpoint.

    Reports initialization status of the model client and Firestore store.
    Always returns HTTP 200; check `services` for actual status.
    """
    state = request.app.state
    model_ok = getattr(state, "translation_service", None) is not None
    store_ok = getattr(state, "datastore", None) is not None

    logger.info("Health check requested")
    return {
        "status": "ok",
        "version": app.version,
        "services": {
            "model": "ok" if model_ok else "unavailable",
            "datastore": "ok" if store_ok else "unavailable",
        },
    }
