"""
Pydantic schemas for configuration saves and the notifications they produce.
"""
from typing import Optional, Dict
from pydantic import BaseModel, Field, ConfigDict

from app.models.db.enums import NotificationLevel, ScopeType

class ConfigSaveEvent(BaseModel):
    """Identifiers carried by a configuration-save event.

    Neither set (or set to 0, the admin store / website) means the save
    happened at default scope.
    """
    store_id: Optional[int] = Field(None, ge=0)
    website_id: Optional[int] = Field(None, ge=0)

class ConfigSaveRequest(ConfigSaveEvent):
    values: Dict[str, Optional[str]] = Field(default_factory=dict, description="Config path -> value")

class Notification(BaseModel):
    level: NotificationLevel
    message: str

    model_config = ConfigDict(frozen=True)

class ScopeRead(BaseModel):
    scope_type: ScopeType
    scope_id: int
