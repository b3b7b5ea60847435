"""
Read-only view of the AvaTax submission queue.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.api.deps import get_db, require_admin
from app.models.db.enums import QueueStatus
from app.models.schemas.base import ResponseBase
from app.models.schemas.queue import QueueEntryRead
from app.services.submission_queue import SubmissionQueue

router = APIRouter(dependencies=[Depends(require_admin)])

@router.get(
    "/",
    response_model=ResponseBase,
    summary="List queue entries"
)
async def list_queue(
    queue_status: Optional[QueueStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db)
) -> ResponseBase:
    entries = SubmissionQueue(db).list_entries(status=queue_status, limit=limit, offset=offset)
    return ResponseBase(
        success=True,
        data={
            "entries": [QueueEntryRead.model_validate(e).model_dump(mode="json") for e in entries],
            "count": len(entries),
            "limit": limit,
            "offset": offset
        }
    )
