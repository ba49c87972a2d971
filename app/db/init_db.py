import logging

from app.db.session import engine
from app.db.base import Base
import app.db.models  # noqa: F401  registers models on Base.metadata

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")
