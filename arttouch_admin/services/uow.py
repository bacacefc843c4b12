from contextlib import contextmanager
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from arttouch_admin.errors import ConflictError, StorageError

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Tracks blob side effects of one database transaction.

    Blobs written through ``store_blob`` are deleted again if the transaction
    rolls back. Blobs passed to ``discard_after_commit`` are deleted only once
    the transaction has committed.
    """

    def __init__(self, db: Session, blobs=None):
        self.db = db
        self.blobs = blobs
        self.stored: List[str] = []
        self.discarded: List[str] = []

    def store_blob(self, data: bytes, name: str) -> str:
        if self.blobs is None:
            raise StorageError("No blob store configured")
        try:
            ref = self.blobs.store(data, name)
        except Exception as e:
            raise StorageError(f"Could not store image {name}: {e}") from e
        self.stored.append(ref)
        return ref

    def discard_after_commit(self, ref: Optional[str]) -> None:
        if ref:
            self.discarded.append(ref)

    def _delete_blobs(self, refs: List[str], failure_message: str) -> None:
        if self.blobs is None:
            if refs:
                logger.warning("No blob store configured; leaving %d blob(s) in place", len(refs))
            return
        for ref in refs:
            try:
                self.blobs.delete(ref)
            except Exception:
                # Leftover files are only logged, never re-raised
                logger.error(failure_message, ref, exc_info=True)

    def rollback(self) -> None:
        self.db.rollback()
        self._delete_blobs(self.stored, "Failed to remove blob %s after rollback")
        self.stored.clear()
        self.discarded.clear()

    def purge_discarded(self) -> None:
        self._delete_blobs(self.discarded, "Failed to remove blob %s")
        self.discarded.clear()


@contextmanager
def unit_of_work(db: Session, blobs=None):
    """Commit on success; on any failure roll back and undo blob writes."""
    uow = UnitOfWork(db, blobs)
    try:
        yield uow
        db.commit()
    except StaleDataError as e:
        uow.rollback()
        raise ConflictError("The record was modified by another request. Reload and try again.") from e
    except SQLAlchemyError as e:
        uow.rollback()
        raise StorageError(str(e)) from e
    except Exception:
        uow.rollback()
        raise
    uow.purge_discarded()
