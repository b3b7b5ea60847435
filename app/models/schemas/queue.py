"""
Pydantic schemas for AvaTax queue inspection.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.models.db.enums import EntityTypeCode, QueueStatus

class QueueEntryRead(BaseModel):
    id: int
    store_id: int
    entity_type_code: EntityTypeCode
    entity_id: int
    increment_id: str
    queue_status: QueueStatus
    attempts: int
    message: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)
