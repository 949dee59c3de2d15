"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from tallyboard.config import settings
from tallyboard.utils.logger import logger

# SQLite connections are shared between the event loop and the watcher task
_connect_args = (
    {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
)

# Create engine
engine = create_engine(
    settings.database_url, echo=settings.debug, connect_args=_connect_args
)

# Create session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# Create base class for models
Base = declarative_base()


def init_db():
    """Initialize database tables."""
    import tallyboard.models  # noqa: F401 - register all models with Base.metadata

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise
