"""
Pydantic schemas for store registration.
"""
from pydantic import BaseModel, Field, ConfigDict

class StoreCreate(BaseModel):
    store_id: int = Field(ge=0)
    website_id: int = Field(0, ge=0)
    code: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)

class StoreRead(StoreCreate):
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
