from __future__ import annotations
"""SQLAlchemy model for scoped configuration values."""
from sqlalchemy import Integer, String, Text, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from app.database import Base
from .enums import ConfigScopeCode

class ConfigSetting(Base):
    __tablename__ = "config_settings"
    __table_args__ = (
        UniqueConstraint("scope", "scope_id", "path", name="uq_config_settings_scope_path"),
    )
    config_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    scope: Mapped[ConfigScopeCode] = mapped_column(Enum(ConfigScopeCode), nullable=False, default=ConfigScopeCode.DEFAULT)
    scope_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    path: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # NULL is a stored "no value", distinct from a missing row (which falls back)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
