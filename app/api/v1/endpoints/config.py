"""
AvaTax configuration endpoints.

Saving settings runs the post-save validation inline: the connectivity probe
and the native tax-rule check. Their results come back as notifications; a
failed probe never undoes the save.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
import time
from app.api.deps import get_db, require_admin, get_avatax_config, get_connectivity_client
from app.integrations.base import ConnectivityClient
from app.models.db.enums import ConfigScopeCode
from app.models.schemas.base import ResponseBase
from app.models.schemas.config import ConfigSaveRequest, ConfigSaveEvent, ScopeRead
from app.services.avatax_config import AvaTaxConfig
from app.services.config_validation import ConfigValidationCoordinator
from app.services.native_tax_rules import NativeTaxRuleChecker
from app.services.scope_config import ScopeConfigWriter
from app.services.scope_resolver import resolve_scope
from app.utils import get_logger, log_business_event, log_performance

router = APIRouter()
logger = get_logger(__name__)

def _write_scope(payload: ConfigSaveRequest) -> tuple[ConfigScopeCode, int]:
    if payload.store_id:
        return ConfigScopeCode.STORES, payload.store_id
    if payload.website_id:
        return ConfigScopeCode.WEBSITES, payload.website_id
    return ConfigScopeCode.DEFAULT, 0

# Sync route: the probe calls asyncio.run, which cannot run on the server loop
@router.post(
    "/",
    response_model=ResponseBase,
    summary="Save AvaTax settings and validate them",
    dependencies=[Depends(require_admin)]
)
def save_config(
    payload: ConfigSaveRequest,
    request: Request,
    db: Session = Depends(get_db),
    config: AvaTaxConfig = Depends(get_avatax_config),
    client: ConnectivityClient = Depends(get_connectivity_client)
) -> ResponseBase:
    """
    Persist scoped AvaTax settings, then validate the resulting configuration.

    Returns the resolved scope and every notification raised by validation,
    in the order they were added.
    """
    start_time = time.time()
    request_id = request.headers.get("X-Request-ID", "unknown")
    scope_code, scope_id = _write_scope(payload)

    logger.info(
        "Config save requested",
        scope=scope_code.value,
        scope_id=scope_id,
        path_count=len(payload.values),
        request_id=request_id
    )

    try:
        ScopeConfigWriter(db).save(scope_code, scope_id, payload.values)
    except Exception as e:
        db.rollback()
        logger.error(
            "Config save failed",
            scope=scope_code.value,
            scope_id=scope_id,
            error=str(e),
            request_id=request_id,
            exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while saving configuration"
        )

    event = ConfigSaveEvent(store_id=payload.store_id, website_id=payload.website_id)
    coordinator = ConfigValidationCoordinator(config, client, NativeTaxRuleChecker(db, config))
    notifications = coordinator.on_config_saved(event)
    scope = resolve_scope(event)

    log_business_event(
        event_type="config_saved",
        details={
            "scope": scope_code.value,
            "scope_id": scope_id,
            "paths": sorted(payload.values.keys()),
            "notification_levels": [n.level.value for n in notifications]
        },
        request_id=request_id
    )

    duration_ms = (time.time() - start_time) * 1000
    log_performance(
        operation="save_config",
        duration_ms=duration_ms,
        additional_data={"notifications": len(notifications)}
    )

    return ResponseBase(
        success=True,
        message="Configuration saved",
        data={
            "scope": ScopeRead(scope_type=scope.scope_type, scope_id=scope.scope_id).model_dump(mode="json"),
            "notifications": [n.model_dump(mode="json") for n in notifications]
        }
    )
