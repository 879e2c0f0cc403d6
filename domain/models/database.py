"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger("nutritrack.database")

# Create SQLAlchemy Base
Base = declarative_base()


def enable_sqlite_pragmas(target_engine):
    """Turn on FK enforcement and case-sensitive LIKE for SQLite connections.

    PostgreSQL already behaves this way; SQLite needs both switched on per
    connection so that ``contains`` filters and cascades match production.
    """
    if target_engine.dialect.name != "sqlite":
        return

    @event.listens_for(target_engine, "connect")
    def _set_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.close()


# Create engine
engine = create_engine(settings.database_url, echo=settings.db_echo, future=True)
enable_sqlite_pragmas(engine)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database():
    """Initialize database schema"""
    # Import models so they are registered on the metadata
    import domain.models  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
