"""Resolve the effective configuration scope of a configuration-save event.

Precedence is store > website > default. Default saves resolve to the
reserved default store so every event maps to exactly one scope.
"""
from __future__ import annotations

from dataclasses import dataclass

from app.config import DEFAULT_STORE_ID
from app.models.db.enums import ScopeType
from app.models.schemas.config import ConfigSaveEvent


@dataclass(frozen=True, slots=True)
class Scope:
    scope_type: ScopeType
    scope_id: int

    @classmethod
    def default(cls) -> "Scope":
        return cls(ScopeType.STORE, DEFAULT_STORE_ID)

    @classmethod
    def for_store(cls, store_id: int) -> "Scope":
        return cls(ScopeType.STORE, store_id)


def resolve_scope(event: ConfigSaveEvent) -> Scope:
    # Store 0 is the admin store and website 0 the admin website: both mean "not set"
    if event.store_id:
        return Scope(ScopeType.STORE, event.store_id)
    if event.website_id:
        return Scope(ScopeType.WEBSITE, event.website_id)
    return Scope.default()


__all__ = ["Scope", "resolve_scope"]
