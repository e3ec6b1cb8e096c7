"""
Database configuration for StrengthSync
"""
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from strengthsync.app.config import settings

DATABASE_URL = settings.DATABASE_URL


def ensure_db_directory():
    """Create the SQLite database directory if it doesn't exist"""
    if DATABASE_URL.startswith("sqlite:///"):
        path = DATABASE_URL[len("sqlite:///"):]
        if path and path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)


# Create SQLAlchemy engine
engine = None


def get_engine():
    """Get or create database engine"""
    global engine
    if engine is None:
        ensure_db_directory()
        connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
        engine = create_engine(
            DATABASE_URL,
            connect_args=connect_args,  # Needed for SQLite
            echo=False  # Set to True for SQL query logging
        )
    return engine


# Create SessionLocal class
SessionLocal = None


def get_session_local():
    """Get or create SessionLocal"""
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return SessionLocal


# Create Base class for models
Base = declarative_base()


def get_session_factory():
    """
    Dependency for the session factory

    The import pipeline opens one short-lived session per row, so routes
    hand it the factory rather than a single request-scoped session.
    """
    return get_session_local()


def import_models():
    """Register all models on Base.metadata"""
    from strengthsync.app.models import audit, badge, document, member, strength  # noqa: F401


def init_db():
    """
    Initialize database - create all tables
    """
    import_models()
    ensure_db_directory()
    Base.metadata.create_all(bind=get_engine())
