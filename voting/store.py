import logging
from contextlib import contextmanager

from sqlalchemy.exc import OperationalError

from extensions import db
from voting.errors import StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def atomic():
    """Run the block as one store transaction.

    Commits when the block finishes, rolls back on any exception. Operational
    failures (locked or unreachable database) surface as ``StoreUnavailable``.
    """
    try:
        yield db.session
        db.session.commit()
    except OperationalError as e:
        db.session.rollback()
        logger.error('Store operation failed: %s', e)
        raise StoreUnavailable() from e
    except Exception:
        db.session.rollback()
        raise
