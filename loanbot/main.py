"""FastAPI application entry point — wires everything together.

Usage:
    python -m loanbot.main

Loads the offer catalog and vocabulary, starts the event bus, and serves the
chat endpoint, the health check and (if present) the static front-end.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from loanbot.channels.web import chat_router
from loanbot.config import settings
from loanbot.conversation.engine import ConversationEngine
from loanbot.conversation.vocabulary import Vocabulary, load_vocabulary
from loanbot.offers.catalog import OfferCatalog, load_catalog
from loanbot.offers.engine import OfferEngine
from loanbot.ops.audit import log_event
from loanbot.ops.events import emit, start_event_system, stop_event_system, subscribe, unsubscribe
from loanbot.schemas.events import EventType, SystemEvent

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)


def build_conversation_engine(
    catalog: OfferCatalog | None = None,
    vocabulary: Vocabulary | None = None,
) -> ConversationEngine:
    """Assemble the engine, reading the catalog/vocabulary files when not given."""
    if catalog is None:
        catalog = load_catalog(settings.catalog.offers_path)
    if vocabulary is None:
        vocabulary = load_vocabulary(settings.catalog.vocabulary_path)
    return ConversationEngine(OfferEngine(catalog), vocabulary)


def create_app(
    catalog: OfferCatalog | None = None,
    vocabulary: Vocabulary | None = None,
) -> FastAPI:
    """Build the FastAPI app. Pass a catalog to skip reading the JSON file."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting LoanBot (env=%s)", settings.environment)

        # 1. Catalog + engine; a bad catalog stops startup here
        engine = build_conversation_engine(catalog, vocabulary)
        app.state.conversation_engine = engine

        # 2. Event system with the audit log subscriber
        subscribe(log_event)
        await start_event_system()
        await emit(SystemEvent(
            event_type=EventType.CATALOG_LOADED,
            data={"offers": len(engine.offer_engine.catalog)},
            source_module="main",
        ))
        await emit(SystemEvent(event_type=EventType.SYSTEM_STARTUP, source_module="main"))

        try:
            yield
        finally:
            logger.info("Shutting down LoanBot...")
            await emit(SystemEvent(event_type=EventType.SYSTEM_SHUTDOWN, source_module="main"))
            await stop_event_system()
            unsubscribe(log_event)

    app = FastAPI(
        title="LoanBot API",
        description="Borrower questionnaire and loan offer matching",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    app.include_router(chat_router)

    # Mounted last so API routes win over files
    if settings.server.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.server.static_dir, html=True), name="static")

    return app


app = create_app()


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "loanbot.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
