"""
Database engine, session factory and FastAPI session dependency
"""
import logging
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from order_fulfillment.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str):
    """Create a SQLAlchemy engine; SQLite connections are shared with the worker thread"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def build_session_factory(bind) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = build_session_factory(engine)


def get_db() -> Iterator[Session]:
    """Dependency that yields a request-scoped session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@retry(
    stop=stop_after_attempt(settings.MAX_RETRIES),
    wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
    retry=retry_if_exception_type(OperationalError),
    reraise=True
)
def init_db(bind=None) -> None:
    """
    Create tables, retrying while the database is unreachable
    
    Args:
        bind: Engine to initialise (defaults to the configured engine)
    """
    # Register models on Base.metadata
    from order_fulfillment import models  # noqa: F401

    bind = bind if bind is not None else engine
    with bind.begin() as connection:
        connection.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=connection)
    logger.info("Database schema ready")
