from __future__ import annotations
"""SQLAlchemy model for the AvaTax submission queue.

The persistence hooks only insert: one PENDING row per newly created
document. Later status transitions are made by whatever transmits the queue.
"""
from sqlalchemy import Integer, String, Text, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from app.database import Base
from .enums import EntityTypeCode, QueueStatus

class QueueEntry(Base):
    __tablename__ = "avatax_queue"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    store_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    entity_type_code: Mapped[EntityTypeCode] = mapped_column(Enum(EntityTypeCode), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    increment_id: Mapped[str] = mapped_column(String(50), nullable=False)
    queue_status: Mapped[QueueStatus] = mapped_column(Enum(QueueStatus), default=QueueStatus.PENDING, index=True)
    attempts: Mapped[int] = mapped_column(Integer, default=0)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def build(
        self,
        store_id: int,
        entity_type_code: EntityTypeCode,
        entity_id: int,
        increment_id: str,
        queue_status: QueueStatus = QueueStatus.PENDING,
    ) -> "QueueEntry":
        self.store_id = store_id
        self.entity_type_code = entity_type_code
        self.entity_id = entity_id
        self.increment_id = increment_id
        self.queue_status = queue_status
        self.attempts = 0
        return self
