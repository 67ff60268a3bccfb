"""
Database configuration and session management
Supports PostgreSQL for deployments and SQLite for local development and tests
"""

import os

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from shared.utils import config, setup_logging

logger = setup_logging("database")

DEFAULT_SQLITE_URL = "sqlite:///./subtrans.db"


def build_database_url() -> str:
    """
    Build database URL from environment variables with fallback to DATABASE_URL
    Supports individual DB components for flexible configuration
    """
    # Priority 1: Use DATABASE_URL if provided
    database_url = config.get("database_url")
    if database_url:
        # Convert postgres:// to postgresql:// for SQLAlchemy compatibility
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        return database_url

    # Priority 2: Build from individual components
    db_host = config.get("db_host") or os.getenv("DB_HOST")
    if not db_host:
        logger.info(f"No database configured, using {DEFAULT_SQLITE_URL}")
        return DEFAULT_SQLITE_URL

    db_port = os.getenv("DB_PORT", "5432")
    db_user = os.getenv("DB_USER", "postgres")
    db_password = os.getenv("DB_PASSWORD", "postgres")
    db_name = os.getenv("DB_NAME", "subtrans")
    db_sslmode = os.getenv("DB_SSLMODE", "prefer")

    database_url = f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
    if db_sslmode:
        database_url += f"?sslmode={db_sslmode}"

    logger.info(f"Built database URL from components: postgresql://{db_user}:***@{db_host}:{db_port}/{db_name}")
    return database_url


def create_database_engine(database_url: str | None = None) -> Engine:
    """Create SQLAlchemy engine with appropriate configuration"""
    database_url = database_url or build_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        enable_sqlite_foreign_keys(engine)
        logger.info("Using SQLite database engine")
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,
            pool_size=10,
            max_overflow=20,
            echo=False,
        )
        logger.info("Using PostgreSQL database engine with connection pooling")
    return engine


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def check_connection(bind: Engine) -> bool:
    """Run a trivial query to verify the database is reachable"""
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        return False


# Create engine and session
engine = create_database_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for FastAPI to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database(bind: Engine | None = None) -> None:
    """Initialize database tables"""
    # Register the ORM models on Base.metadata
    import models.database  # noqa: F401

    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise
