"""Scoped configuration storage with store -> website -> default fallback.

Reads walk the chain from the most specific row to the shipped defaults in
``AVATAX_CONFIG_DEFAULTS``. A row that exists with a NULL value stops the
walk: an explicitly cleared credential at store level must not inherit the
website's value.
"""
from __future__ import annotations

from typing import Mapping

from sqlalchemy.orm import Session

from app.config import AVATAX_CONFIG_DEFAULTS, TRUTHY_FLAG_VALUES, DEFAULT_WEBSITE_ID
from app.models.db.config_settings import ConfigSetting
from app.models.db.enums import ConfigScopeCode, ScopeType
from app.models.db.stores import Store
from app.services.scope_resolver import Scope
from app.utils import get_logger

logger = get_logger(__name__)

_MISSING = object()


class ScopeConfigReader:
    def __init__(self, session: Session, defaults: Mapping[str, str | None] | None = None):
        self.session = session
        self.defaults = AVATAX_CONFIG_DEFAULTS if defaults is None else defaults

    def _chain(self, scope: Scope) -> list[tuple[ConfigScopeCode, int]]:
        if scope.scope_type == ScopeType.DEFAULT:
            return [(ConfigScopeCode.DEFAULT, 0)]
        if scope.scope_type == ScopeType.WEBSITE:
            return [(ConfigScopeCode.WEBSITES, scope.scope_id), (ConfigScopeCode.DEFAULT, 0)]
        chain = [(ConfigScopeCode.STORES, scope.scope_id)]
        store = self.session.get(Store, scope.scope_id)
        if store is not None:
            chain.append((ConfigScopeCode.WEBSITES, store.website_id))
        elif scope.scope_id == 0:
            chain.append((ConfigScopeCode.WEBSITES, DEFAULT_WEBSITE_ID))
        chain.append((ConfigScopeCode.DEFAULT, 0))
        return chain

    def _row_value(self, path: str, scope_code: ConfigScopeCode, scope_id: int) -> object:
        row = (
            self.session.query(ConfigSetting)
            .filter(
                ConfigSetting.scope == scope_code,
                ConfigSetting.scope_id == scope_id,
                ConfigSetting.path == path,
            )
            .one_or_none()
        )
        return _MISSING if row is None else row.value

    def get_value(self, path: str, scope: Scope | None = None) -> str | None:
        for scope_code, scope_id in self._chain(scope or Scope.default()):
            value = self._row_value(path, scope_code, scope_id)
            if value is not _MISSING:
                return value  # type: ignore[return-value]
        return self.defaults.get(path)

    def is_set_flag(self, path: str, scope: Scope | None = None) -> bool:
        value = self.get_value(path, scope)
        if value is None:
            return False
        return value.strip().lower() in TRUTHY_FLAG_VALUES


class ScopeConfigWriter:
    def __init__(self, session: Session):
        self.session = session

    def save(self, scope_code: ConfigScopeCode, scope_id: int, values: Mapping[str, str | None]) -> list[ConfigSetting]:
        """Upsert every path at the given scope and commit."""
        if scope_code == ConfigScopeCode.DEFAULT:
            scope_id = 0
        saved: list[ConfigSetting] = []
        for path, value in values.items():
            row = (
                self.session.query(ConfigSetting)
                .filter(
                    ConfigSetting.scope == scope_code,
                    ConfigSetting.scope_id == scope_id,
                    ConfigSetting.path == path,
                )
                .one_or_none()
            )
            if row is None:
                row = ConfigSetting(scope=scope_code, scope_id=scope_id, path=path)
                self.session.add(row)
            row.value = value
            saved.append(row)
        self.session.commit()
        logger.info(
            "Config values saved",
            scope=scope_code.value,
            scope_id=scope_id,
            paths=sorted(values.keys()),  # never log values, they include license keys
        )
        return saved


__all__ = ["ScopeConfigReader", "ScopeConfigWriter"]
