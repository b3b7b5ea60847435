from __future__ import annotations
"""SQLAlchemy model for store views (scope fallback needs each store's website)."""
from sqlalchemy import Integer, String, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base

class Store(Base):
    __tablename__ = "stores"
    # Explicit ids: store 0 is the admin/default store
    store_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    website_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
