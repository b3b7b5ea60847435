"""
Store registration endpoints.

Stores map a store id to its website, which is the middle step of the
scoped configuration fallback.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from app.api.deps import get_db, require_admin
from app.models.db import Store
from app.models.schemas.stores import StoreCreate, StoreRead
from app.utils import get_logger, log_business_event

router = APIRouter(dependencies=[Depends(require_admin)])
logger = get_logger(__name__)

@router.post(
    "/",
    response_model=StoreRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a store"
)
async def create_store(
    payload: StoreCreate,
    request: Request,
    db: Session = Depends(get_db)
) -> StoreRead:
    request_id = request.headers.get("X-Request-ID", "unknown")

    existing = db.query(Store).filter(
        (Store.store_id == payload.store_id) | (Store.code == payload.code)
    ).first()
    if existing:
        logger.warning(
            "Store creation failed: duplicate",
            store_id=payload.store_id,
            code=payload.code,
            request_id=request_id
        )
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Store with id {payload.store_id} or code '{payload.code}' already exists"
        )

    store = Store(
        store_id=payload.store_id,
        website_id=payload.website_id,
        code=payload.code,
        name=payload.name,
        is_active=True
    )
    db.add(store)
    db.commit()
    db.refresh(store)

    log_business_event(
        event_type="store_created",
        details={"store_id": store.store_id, "website_id": store.website_id, "code": store.code},
        request_id=request_id
    )
    return StoreRead.model_validate(store)

@router.get(
    "/",
    response_model=List[StoreRead],
    summary="List stores"
)
async def list_stores(
    active_only: bool = True,
    db: Session = Depends(get_db)
) -> List[StoreRead]:
    query = db.query(Store)
    if active_only:
        query = query.filter(Store.is_active == True)
    return [StoreRead.model_validate(s) for s in query.order_by(Store.store_id).all()]
