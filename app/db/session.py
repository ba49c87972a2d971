import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from app.core import config
from app.core.errors import Unavailable

logger = logging.getLogger(__name__)

DATABASE_URL = config.DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def store_operation(db: Session, operation: str):
    """
    Run a block of store calls, turning database failures into Unavailable.

    The session is rolled back before the error propagates. Nothing is retried.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error during {operation}: {e}", exc_info=True)
        raise Unavailable(f"Failed to {operation}") from e


def storable_id(value: int) -> bool:
    """Whether `value` can be a primary or foreign key in the store."""
    return 1 <= value <= config.STORE_INT_MAX
