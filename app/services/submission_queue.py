"""Database-backed AvaTax submission queue.

The table does not enforce one row per document; callers decide when to
enqueue. A failed insert is re-raised as ``CouldNotSaveError`` because a
dropped row means the document never reaches AvaTax.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import CouldNotSaveError
from app.models.db.enums import QueueStatus
from app.models.db.queue import QueueEntry
from app.utils import get_logger

logger = get_logger(__name__)


class SubmissionQueue:
    def __init__(self, session: Session):
        self.session = session

    def create(self) -> QueueEntry:
        return QueueEntry()

    def save(self, entry: QueueEntry) -> QueueEntry:
        try:
            self.session.add(entry)
            self.session.commit()
            self.session.refresh(entry)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(
                "Queue entry save failed",
                entity_type_code=getattr(entry.entity_type_code, "value", entry.entity_type_code),
                entity_id=entry.entity_id,
                error=str(e),
            )
            raise CouldNotSaveError(f"Could not save AvaTax queue entry: {e}") from e
        return entry

    def list_entries(
        self,
        *,
        status: Optional[QueueStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[QueueEntry]:
        query = self.session.query(QueueEntry)
        if status is not None:
            query = query.filter(QueueEntry.queue_status == status)
        return query.order_by(QueueEntry.id.desc()).offset(offset).limit(limit).all()

    def count_for_entity(self, entity_type_code, entity_id: int) -> int:
        return (
            self.session.query(QueueEntry)
            .filter(QueueEntry.entity_type_code == entity_type_code, QueueEntry.entity_id == entity_id)
            .count()
        )


__all__ = ["SubmissionQueue"]
