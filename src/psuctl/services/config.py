"""ConfigService — get and set keys in the psuctl config file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from psuctl.domain.errors import PsuError
from psuctl.services.result import ServiceResult

if TYPE_CHECKING:
    from psuctl.config.store import ConfigStore


class ConfigService:
    """Thin ServiceResult adapter over :class:`ConfigStore`.

    Not a :class:`BaseService`: it never touches the remote API.
    """

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def get(self, key: str) -> ServiceResult:
        try:
            value = self._store.get(key)
        except PsuError as exc:
            return ServiceResult.failure("config_get", exc.code, exc.message, **exc.detail)
        return ServiceResult(ok=True, op="config_get", data={"key": key, "value": value})

    def set(self, key: str, value: str) -> ServiceResult:
        try:
            stored = self._store.set(key, value)
        except PsuError as exc:
            return ServiceResult.failure("config_set", exc.code, exc.message, **exc.detail)
        return ServiceResult(
            ok=True,
            op="config_set",
            data={"key": key, "value": stored, "path": str(self._store.path)},
        )
