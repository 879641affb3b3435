import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from deck_tracker.core.config import get_settings
from deck_tracker.core.database import get_sync_session, init_db
from deck_tracker.core.errors import register_exception_handlers
from deck_tracker.core.logging_config import setup_logging
from deck_tracker.seed.seed_decks import decks_missing, seed_decks

# --- Routers ---
from deck_tracker.routes.admin_routes import auth_router as admin_auth_router
from deck_tracker.routes.admin_routes import router as admin_router
from deck_tracker.routes.event_routes import router as event_router
from deck_tracker.routes.submission_routes import router as submission_router
from deck_tracker.routes.validation_routes import router as validation_router

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Deck Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    # Store problems are logged, not fatal: /health must stay reachable
    try:
        init_db()
        if settings.seed_on_startup:
            with get_sync_session() as session:
                if decks_missing(session):
                    logger.info("🌱 No decks found. Seeding default decks...")
                    seed_decks(session)
    except SQLAlchemyError as exc:
        logger.error("Database initialisation failed: %s", exc)

    if not settings.admin_configured:
        logger.warning("ADMIN_SECRET is not set; admin endpoints will fail until it is configured")


@app.get("/health")
def health():
    return {"status": "ok"}


# Routers
app.include_router(event_router, prefix="/events", tags=["Events"])
app.include_router(submission_router, tags=["Submissions"])
app.include_router(admin_auth_router, prefix="/admin", tags=["Admin"])
app.include_router(admin_router, prefix="/admin", tags=["Admin"])
app.include_router(validation_router, prefix="/admin/events", tags=["Validation"])
