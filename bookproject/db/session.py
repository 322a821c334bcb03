"""
Database session management for bookproject.

Provides session factory and initialization utilities.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .models import Base

# Global session factory
_SessionFactory: Optional[sessionmaker] = None
_engine: Optional[Engine] = None


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    # Enable foreign keys for SQLite
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db(library_path: Path, echo: bool = False) -> Engine:
    """
    Initialize database and create all tables.

    Args:
        library_path: Path to library directory
        echo: If True, log all SQL statements (debug mode)

    Returns:
        SQLAlchemy engine
    """
    global _engine, _SessionFactory

    library_path = Path(library_path)
    library_path.mkdir(parents=True, exist_ok=True)

    db_path = library_path / 'library.db'
    _engine = create_engine(f'sqlite:///{db_path}', echo=echo)

    Base.metadata.create_all(_engine)

    _SessionFactory = sessionmaker(bind=_engine)

    return _engine


def get_session() -> Session:
    """
    Get a new database session.

    Raises:
        RuntimeError: If database not initialized
    """
    if _SessionFactory is None:
        raise RuntimeError(
            "Database not initialized. Call init_db() first."
        )
    return _SessionFactory()


def close_db():
    """Close database connection and cleanup."""
    global _engine, _SessionFactory

    if _engine:
        _engine.dispose()
        _engine = None

    _SessionFactory = None


def get_or_create(session: Session, model, **kwargs):
    """
    Get existing instance or create new one.

    Args:
        session: Database session
        model: SQLAlchemy model class
        **kwargs: Filter criteria and/or values to set

    Returns:
        Tuple of (instance, created: bool)
    """
    instance = session.query(model).filter_by(**kwargs).first()
    if instance:
        return instance, False
    instance = model(**kwargs)
    session.add(instance)
    return instance, True
