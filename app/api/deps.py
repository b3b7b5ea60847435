"""
Dependencies for database sessions, admin authentication and AvaTax collaborators.
"""
import secrets
from typing import Generator, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.config import ADMIN_API_TOKEN
from app.database import SessionLocal
from app.integrations.avatax import AvaTaxRestClient
from app.integrations.base import ConnectivityClient
from app.services.avatax_config import AvaTaxConfig
from app.services.invoice_persistence import InterceptedInvoiceResource
from app.utils import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)

def get_db() -> Generator[Session, None, None]:
    """One session per request, rolled back on error and always closed."""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error("Database session error", error=str(e), exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()

def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> None:
    """
    Guard admin endpoints with the shared ADMIN_API_TOKEN.

    When no token is configured (local development) the guard is open.

    Raises:
        HTTPException: If a token is configured and the bearer token does not match
    """
    if not ADMIN_API_TOKEN:
        return
    supplied = credentials.credentials if credentials else ""
    if not secrets.compare_digest(supplied, ADMIN_API_TOKEN):
        logger.warning(
            "Admin authentication failed",
            token_prefix=supplied[:4] + "..." if supplied else None
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )

def get_avatax_config(db: Session = Depends(get_db)) -> AvaTaxConfig:
    return AvaTaxConfig(db)

def get_connectivity_client(
    config: AvaTaxConfig = Depends(get_avatax_config),
) -> ConnectivityClient:
    """Client used by the config-save probe; tests override this dependency."""
    return AvaTaxRestClient(config)

def get_invoice_resource(db: Session = Depends(get_db)) -> InterceptedInvoiceResource:
    return InterceptedInvoiceResource(db)
