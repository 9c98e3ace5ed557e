"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from smartspend_companion.api.middleware import RequestIDMiddleware, MetricsMiddleware
from smartspend_companion.api.v1 import companion, decision, history, insights
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.companion.queue import ReactionQueue, RecentReactions
from smartspend_companion.infrastructure.observability.logging import setup_logging
from smartspend_companion.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.reaction_queue.aclose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="SmartSpend Companion",
        description="Purchase decisions and companion reactions",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # One companion session per app instance
    dialogue = DialogueBank(seed=settings.dialogue_seed)
    reaction_queue = ReactionQueue(
        dialogue,
        buffer_ms=settings.reaction_buffer_ms,
        max_pending=settings.max_pending_reactions,
    )
    recent_reactions = RecentReactions(limit=settings.recent_reactions_limit)
    reaction_queue.on_reaction(recent_reactions)

    app.state.dialogue = dialogue
    app.state.reaction_queue = reaction_queue
    app.state.recent_reactions = recent_reactions

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(decision.router, prefix="/v1", tags=["decisions"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(companion.router, prefix="/v1", tags=["companion"])

    return app


app = create_app()
