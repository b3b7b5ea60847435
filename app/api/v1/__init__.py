"""
API v1 router initialization and setup.
"""
from fastapi import APIRouter
from .endpoints import config, stores, invoices, queue

api_router = APIRouter()

api_router.include_router(
    config.router,
    prefix="/config",
    tags=["config"]
)

api_router.include_router(
    stores.router,
    prefix="/stores",
    tags=["stores"]
)

api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["invoices"]
)

api_router.include_router(
    queue.router,
    prefix="/queue",
    tags=["queue"]
)
