from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import SQLModel, Session

from deck_tracker.core.config import Settings, get_settings
from deck_tracker.core.errors import ConfigurationError

# --- Engine ---
def build_engine(settings: Settings):
    """Create the sync engine for the configured store."""
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # Request handlers run in FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(settings.database_url, echo=settings.sql_echo, connect_args=connect_args)


engine = build_engine(get_settings())


# --- DB session (used in routes) ---
def get_session():
    with Session(engine) as session:
        yield session


# --- Session for seeding/scripts ---
def get_sync_session() -> Session:
    return Session(engine)


# --- Initialize DB tables ---
def init_db(bind=None):
    """Create tables if they don't exist."""
    from deck_tracker import models  # noqa: F401  (registers table metadata)

    SQLModel.metadata.create_all(bind or engine)


# --- Dialect-aware INSERT ---
_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def dialect_insert(session: Session, model):
    """
    Return an INSERT construct for `model` that supports
    on_conflict_do_nothing / on_conflict_do_update on the bound store.
    """
    dialect = session.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise ConfigurationError(f"Unsupported database dialect for upserts: {dialect}")
    return insert(model)
