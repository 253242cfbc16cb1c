from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# DATABASE ENGINE CONFIGURATION
# =============================================================================

def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLite engine.

    check_same_thread is disabled because FastAPI runs sync endpoints in a
    threadpool; each request still gets its own session.
    """
    engine = create_engine(
        database_url,
        echo=echo,  # Print all SQL queries to console
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        logger.debug("New database connection established")

    return engine


# =============================================================================
# SESSION CONFIGURATION
# =============================================================================

def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,  # Don't auto-commit transactions
        autoflush=False,   # Don't auto-flush before queries
        bind=engine,
        expire_on_commit=False  # Don't expire objects after commit
    )


# Create Base class for models
Base = declarative_base()


# =============================================================================
# DATABASE SESSION DEPENDENCY
# =============================================================================

def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI endpoints.

    Opens a session from the factory the app was built with and closes it
    after the request, even if the request failed.
    """
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# DATABASE UTILITIES
# =============================================================================

def create_database_tables(bind: Engine):
    """
    Create all tables defined in models if they do not exist yet.
    """
    # Register models on Base.metadata
    from app.models import student  # noqa: F401

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready")


def check_database_connection(bind: Engine) -> bool:
    """
    Check if database connection is working.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False


def init_db(bind: Engine):
    """
    Initialize database.
    Run this when starting the application.
    """
    logger.info("Initializing database...")

    if not check_database_connection(bind):
        raise RuntimeError("Cannot connect to database!")

    create_database_tables(bind)
    logger.info("Database initialized successfully!")
