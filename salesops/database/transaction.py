"""Unit-of-work helper for multi-row writes."""
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from salesops.utils.errors import ConflictError, InternalError
from salesops.utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def atomic(db: Session, operation: str):
    """
    Run the enclosed writes as one transaction.

    Commits when the block exits normally. On any error the session is
    rolled back so no partial state is visible, then the error is re-raised:
    uniqueness violations as ConflictError, other storage failures as
    InternalError, everything else unchanged.

    Args:
        db: Database session
        operation: Short description used in logs and error messages
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"{operation} rolled back on integrity error: {e.orig}")
        raise ConflictError(f"{operation} conflicted with existing data, please retry") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{operation} rolled back on storage error: {e}", exc_info=True)
        raise InternalError(f"{operation} failed") from e
    except Exception:
        db.rollback()
        raise
