"""
FastAPI application entry point for the phishing relay.
"""

import asyncio
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from phish_relay import __version__
from phish_relay.api.error_handlers import EXCEPTION_HANDLERS
from phish_relay.api.middleware import (
    BodySizeLimitMiddleware,
    RequestTracingMiddleware,
    UnhandledErrorMiddleware,
)
from phish_relay.api.models import ServiceInfoResponse
from phish_relay.api.routes import router
from phish_relay.config import Settings, settings as default_settings
from phish_relay.llm.base_client import BaseLLMClient
from phish_relay.logging_config import configure_logging
from phish_relay.relay.state import RelayState

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    llm_client: Optional[BaseLLMClient] = None,
    resolve_on_startup: bool = True,
) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Settings to use (defaults to the environment-loaded instance)
        llm_client: Upstream client override; by default a GeminiClient is
            created when GOOGLE_API_KEY is set
        resolve_on_startup: Schedule model resolution when the app starts
    """
    settings = settings or default_settings
    state = RelayState.from_settings(settings, llm_client=llm_client)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Relays email summaries to Gemini for phishing classification",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.relay = state
    app.state.resolve_task = None

    # Innermost: uncaught errors become a 500 inside the CORS layer
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.MAX_BODY_BYTES)
    # Request tracing wraps the app so request_id is bound for all handler logs
    app.add_middleware(RequestTracingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(router)

    @app.on_event("startup")
    async def startup():
        """Warn about a missing key and start model resolution in the background."""
        logger.info(
            "Application startup",
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            preferred_model=settings.GEMINI_MODEL,
            candidate_count=len(settings.CANDIDATE_MODELS),
        )

        if not settings.GOOGLE_API_KEY:
            logger.warning("Missing GOOGLE_API_KEY. /api/phishing will return 503 until it is set.")
            return

        if resolve_on_startup:
            # Not awaited: the server accepts traffic while models are probed
            app.state.resolve_task = asyncio.create_task(_resolve_and_report(state))

    @app.on_event("shutdown")
    async def shutdown():
        task = app.state.resolve_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.info("Model resolution cancelled at shutdown")
        if state.llm_client is not None:
            await state.llm_client.close()
        logger.info("Application shutdown complete")

    if settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    @app.get("/", response_model=ServiceInfoResponse, include_in_schema=False)
    async def root() -> ServiceInfoResponse:
        return ServiceInfoResponse(
            service=settings.APP_NAME,
            version=settings.APP_VERSION,
            model_in_use=state.model_in_use,
            metrics="/metrics" if settings.PROMETHEUS_ENABLED else None,
        )

    return app


async def _resolve_and_report(state: RelayState) -> Optional[str]:
    model = await state.resolve_model()
    logger.info("Model in use", model=model or "(none)")
    return model


configure_logging(default_settings.LOG_LEVEL, default_settings.ENVIRONMENT)
app = create_app()


def run() -> None:
    """Console entry point: serve the relay with uvicorn."""
    import uvicorn

    logger.info("Starting phish relay", version=__version__, port=default_settings.PORT)
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_config=None,  # keep the structlog handlers
    )


if __name__ == "__main__":
    run()
