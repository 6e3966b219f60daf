"""Database infrastructure setup."""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from linkbot.adapters.outbound.persistence.models import Base
from linkbot.infrastructure.logging.logger import logger

# Engine creation is deferred until configure_database() is called at startup
_engine: Optional[Engine] = None
_SessionLocal = None


def configure_database(database_url: str, echo: bool = False) -> Engine:
    """
    Create the database engine and session factory.

    Args:
        database_url: SQLAlchemy connection URL
        echo: Log SQL queries

    Returns:
        SQLAlchemy engine
    """
    global _engine, _SessionLocal
    if not database_url:
        raise ValueError("DATABASE_URL is required for database operations")
    _engine = create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo,
    )
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def init_db() -> bool:
    """
    Create missing tables.

    Returns:
        True if the schema is in place, False if creation failed
    """
    if _engine is None:
        return False
    try:
        Base.metadata.create_all(_engine)
    except SQLAlchemyError as e:
        logger.error(f"Database init failed: {str(e)}")
        return False
    return True


def get_db_session():
    """
    Get a database session.

    Returns:
        SQLAlchemy session instance
    """
    if _SessionLocal is None:
        raise ValueError("Database is not configured")
    return _SessionLocal()
