"""Key/value access to the YAML config file for ``psuctl config``.

Keys are dotted paths into :class:`~psuctl.config.models.PsuConfig`
(``portainer.url``, ``defaults.endpoint``).  Writes go through a
round-trip YAML parser so user comments and ordering survive, and every
new value is validated against the models before the file is touched.
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from psuctl.config.models import PsuConfig
from psuctl.domain.errors import PsuError


class UnknownConfigKeyError(PsuError):
    code = "UNKNOWN_KEY"
    default_message = "Unknown configuration key"


class InvalidConfigValueError(PsuError):
    code = "INVALID_VALUE"
    default_message = "Invalid configuration value"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser."""
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def config_keys(model: type[BaseModel] = PsuConfig, prefix: str = "") -> list[str]:
    """Return every settable dotted key, in model declaration order."""
    keys: list[str] = []
    for name, info in model.model_fields.items():
        annotation = info.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            keys.extend(config_keys(annotation, f"{prefix}{name}."))
        else:
            keys.append(f"{prefix}{name}")
    return keys


class ConfigStore:
    """Get and set individual keys in one config file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _check_key(self, key: str) -> list[str]:
        if key not in config_keys():
            raise UnknownConfigKeyError(f'Unknown configuration key "{key}"', key=key)
        return key.split(".")

    def _load(self) -> CommentedMap:
        if not self.path.is_file():
            return CommentedMap()
        data = _new_yaml().load(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, CommentedMap) else CommentedMap()

    def get(self, key: str) -> Any:
        """Return the effective value of *key* (file value or default)."""
        parts = self._check_key(key)
        value: Any = PsuConfig.model_validate(self._load())
        for part in parts:
            value = getattr(value, part)
        return value

    def set(self, key: str, raw_value: str) -> Any:
        """Validate and persist *raw_value* under *key*, returning the stored value."""
        parts = self._check_key(key)
        data = self._load()

        node = data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, CommentedMap):
                child = CommentedMap()
                node[part] = child
            node = child
        node[parts[-1]] = raw_value

        try:
            validated: Any = PsuConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigValueError(
                f'Invalid value for "{key}": {raw_value!r}',
                key=key,
                errors=[e["msg"] for e in exc.errors()],
            ) from exc
        for part in parts:
            validated = getattr(validated, part)
        node[parts[-1]] = validated

        buf = StringIO()
        _new_yaml().dump(data, buf)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(buf.getvalue(), encoding="utf-8")
        return validated
