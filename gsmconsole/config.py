"""Layered configuration files in TOML, JSON or YAML with dotted-key access."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
import yaml

from gsmconsole import logger

SUPPORTED_TYPES = ("json", "toml", "yaml", "yml")

_MISSING = object()


@dataclass
class ConfigSpec:
    """Where to look for a configuration file and how to parse it."""

    type: str
    name: str
    path: list[str] = field(default_factory=list)


def _match(node: dict[str, Any], part: str) -> str | None:
    """Return the key of ``node`` equal to ``part`` ignoring case, if any."""
    if part in node:
        return part
    lowered = part.lower()
    for key in node:
        if isinstance(key, str) and key.lower() == lowered:
            return key
    return None


def _parse(text: str, config_type: str) -> dict[str, Any]:
    if not text.strip():
        return {}
    if config_type == "json":
        data = json.loads(text)
    elif config_type == "toml":
        data = tomllib.loads(text)
    elif config_type in ("yaml", "yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as err:
            raise ValueError(str(err)) from err
        if data is None:
            data = {}
    else:
        raise ValueError(f'Unsupported Config Type "{config_type}"')
    if not isinstance(data, dict):
        raise ValueError("configuration root must be a table/object")
    return data


def _dump(data: dict[str, Any], config_type: str) -> str:
    if config_type == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    if config_type == "toml":
        return tomli_w.dumps(data)
    if config_type in ("yaml", "yml"):
        return yaml.safe_dump(data, allow_unicode=True, sort_keys=True)
    raise ValueError(f'Unsupported Config Type "{config_type}"')


class Settings:
    """A nested key/value store bound to a configuration file.

    Keys are dotted paths and are matched without regard to case.
    """

    def __init__(
        self,
        name: str = "",
        config_type: str = "",
        paths: list[str] | tuple[str, ...] = (),
        data: dict[str, Any] | None = None,
    ) -> None:
        self.name = name
        self.config_type = config_type.lower()
        self.paths = list(paths)
        self.data: dict[str, Any] = data if data is not None else {}
        self.config_file_used = ""

    def _lookup(self, key: str) -> Any:
        node: Any = self.data
        for part in key.split("."):
            if not isinstance(node, dict):
                return _MISSING
            actual = _match(node, part)
            if actual is None:
                return _MISSING
            node = node[actual]
        return node

    def is_set(self, key: str) -> bool:
        """Return whether ``key`` holds a value."""
        return self._lookup(key) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at ``key``, or ``default`` when it is not set."""
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` at ``key``, creating intermediate tables as needed."""
        parts = key.split(".")
        node = self.data
        for part in parts[:-1]:
            actual = _match(node, part)
            if actual is None or not isinstance(node[actual], dict):
                actual = actual if actual is not None else part.lower()
                node[actual] = {}
            node = node[actual]
        last = _match(node, parts[-1])
        node[last if last is not None else parts[-1].lower()] = value

    def _candidates(self) -> list[str]:
        found = []
        for directory in self.paths:
            found.append(os.path.join(directory, f"{self.name}.{self.config_type}"))
            found.append(os.path.join(directory, self.name))
        return found

    def _find_file(self) -> str | None:
        return next((c for c in self._candidates() if os.path.isfile(c)), None)

    def write(self, path: str | os.PathLike[str] | None = None) -> None:
        """Write all values to ``path``, or to the file in use when omitted."""
        target = os.fspath(path) if path else self.config_file_used
        if not target:
            raise ValueError("no configuration file to write to")
        ext = os.path.splitext(target)[1][1:].lower()
        config_type = ext if ext in SUPPORTED_TYPES else self.config_type
        text = _dump(self.data, config_type)
        with open(target, "w", encoding="utf-8") as handle:
            handle.write(text)

    def safe_write(self) -> None:
        """Write to ``<first path>/<name>.<type>``; an existing file is never replaced."""
        if not self.paths:
            raise ValueError("missing configuration for 'configPath'")
        target = os.path.join(self.paths[0], f"{self.name}.{self.config_type}")
        text = _dump(self.data, self.config_type)
        with open(target, "x", encoding="utf-8") as handle:
            handle.write(text)
        self.config_file_used = target


def test_or_insert(cfg: Settings | None, key: str, value: Any) -> None:
    """Set ``key`` to ``value`` only if it has no value yet."""
    if cfg is None:
        raise ValueError("Config passing in is None.")
    if not cfg.is_set(key):
        cfg.set(key, value)


def load(spec: ConfigSpec) -> Settings:
    """Load the configuration described by ``spec``.

    A missing file is created empty in the first search path; a file that
    cannot be read or parsed raises :class:`gsmconsole.logger.LogPanic`.
    """
    settings = Settings(name=spec.name, config_type=spec.type, paths=spec.path)
    found = settings._find_file()
    if found is None:
        try:
            settings.safe_write()
        except (OSError, ValueError) as err:
            logger.error(err)
        return settings
    try:
        with open(found, encoding="utf-8") as handle:
            settings.data = _parse(handle.read(), settings.config_type)
    except (OSError, ValueError) as err:
        logger.panic(err)
    settings.config_file_used = found
    return settings