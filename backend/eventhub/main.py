"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventhub.config import settings
from eventhub.database import Base, engine
from eventhub.dependencies import get_hub
from eventhub.errors import register_exception_handlers
from eventhub.services.broadcast import BroadcastHub

# Import routers
from eventhub.routers import events, live, rsvps, users

# Import all models so Base.metadata knows about them
from eventhub.models.user import User  # noqa: F401
from eventhub.models.event import Event  # noqa: F401
from eventhub.models.rsvp import RSVP  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    logger.info("Event hub started")
    yield
    logger.info("Event hub stopping with %d live subscribers", len(app.state.hub))


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    app = FastAPI(
        title="Event Hub",
        description="Event publishing, moderation and RSVPs with live updates",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.hub = BroadcastHub()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Register routers
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(events.router, prefix="/api/events", tags=["Events"])
    app.include_router(rsvps.router, prefix="/api/events", tags=["RSVPs"])
    app.include_router(live.router, tags=["Live"])

    @app.get("/api/health")
    def health_check(hub: BroadcastHub = Depends(get_hub)):
        return {"status": "ok", "subscribers": len(hub)}

    return app


app = create_app()
