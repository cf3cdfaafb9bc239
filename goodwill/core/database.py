"""
Database configuration and session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from contextlib import contextmanager
from typing import Generator, Iterator
import logging

from goodwill.core.config import settings

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Lazy initialization for engine and session
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create SQLAlchemy engine lazily"""
    global _engine

    if _engine is None:
        database_url = settings.DATABASE_URL
        if not database_url:
            raise ValueError("DATABASE_URL is not configured")

        logger.info("Creating database engine...")

        if database_url.startswith("sqlite"):
            # SQLite pools do not take size/overflow arguments
            _engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                echo=settings.DEBUG,
            )
        else:
            _engine = create_engine(
                database_url,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=10,
                pool_timeout=30,
                pool_recycle=1800,  # Recycle connections after 30 min
                echo=settings.DEBUG,
            )
        logger.info("Database engine created successfully")

    return _engine


def get_session_local():
    """Get or create SessionLocal lazily"""
    global _SessionLocal

    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine()
        )

    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    Use this in FastAPI route dependencies.

    Example:
        @router.get("/likes/received")
        def received(db: Session = Depends(get_db)):
            return LikeService.get_likes(db, phone_number)
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a block of writes as one transaction

    Commits when the block exits normally, rolls back and re-raises on any
    exception so no partial write survives.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
