from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from typing import Generator
import logging

from .config import settings

logger = logging.getLogger(__name__)

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_size": settings.DB_POOL_SIZE, "max_overflow": settings.DB_MAX_OVERFLOW}
    options = {"connect_args": {"check_same_thread": False}}
    if url in MEMORY_URLS:
        # every connection must see the same in-memory database
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db() -> None:
    """
    Create the users and sessions tables if they do not exist yet.
    Called once on application startup.
    """
    from .models import User, UserSession  # noqa: F401  registers tables with Base

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized at %s", engine.url.render_as_string(hide_password=True))
    except SQLAlchemyError:
        logger.exception("Failed to apply database schema")
        raise


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection is successful, False otherwise
    """
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection check failed: %s", e)
        return False
    finally:
        db.close()
