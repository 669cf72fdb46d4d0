"""Configuration for registry access and similarity ranking.

Settings come from three layers, later ones winning:

- the defaults on :class:`LookalikeConfig`;
- an optional YAML file (``--config``);
- explicit command-line options.

Config file format::

    registry_url: "https://registry.npmjs.org"
    timeout: 10
    search_size: 10
    similarity_threshold: 2
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from lookalike.logging import get_logger
from lookalike.registry import DEFAULT_REGISTRY_URL, DEFAULT_SEARCH_SIZE, DEFAULT_TIMEOUT
from lookalike.similarity import SIMILARITY_THRESHOLD

log = get_logger("config")

# The npm search endpoint refuses larger pages.
MAX_SEARCH_SIZE = 250


@dataclass
class LookalikeConfig:
    """Resolved settings for one lookalike invocation."""

    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT  # seconds, per request
    search_size: int = DEFAULT_SEARCH_SIZE
    similarity_threshold: int = SIMILARITY_THRESHOLD

    def normalized(self) -> LookalikeConfig:
        """Return a copy with the trailing ``/`` removed from ``registry_url``.

        Only call this on a config that passed :func:`validate_config`.
        """
        return replace(self, registry_url=self.registry_url.rstrip("/"))


@dataclass
class ConfigError:
    """A single configuration validation error."""

    field: str
    message: str


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a config file and return its top-level mapping.

    An empty file yields an empty mapping.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file does not contain a YAML mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")
    return data


def config_from_mapping(
    data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> LookalikeConfig:
    """Build a :class:`LookalikeConfig` from file data and CLI overrides.

    Overrides whose value is ``None`` (options the user did not pass) are
    ignored.

    Raises:
        ValueError: On unknown keys.
    """
    known = {f.name for f in fields(LookalikeConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")

    merged = dict(data)
    for key, value in (cli_overrides or {}).items():
        if value is not None:
            merged[key] = value

    config = LookalikeConfig(**merged)
    log.debug("Resolved config: %s", config)
    return config


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _type_errors(config: LookalikeConfig) -> list[ConfigError]:
    checks = [
        ("registry_url", isinstance(config.registry_url, str), "a string"),
        ("timeout", _is_number(config.timeout), "a number"),
        ("search_size", _is_int(config.search_size), "an integer"),
        ("similarity_threshold", _is_int(config.similarity_threshold), "an integer"),
    ]
    return [
        ConfigError(
            field=name,
            message=f"{name} must be {expected}, got {type(getattr(config, name)).__name__}",
        )
        for name, ok, expected in checks
        if not ok
    ]


def validate_config(config: LookalikeConfig) -> list[ConfigError]:
    """Validate a configuration. An empty list means valid.

    Values loaded from YAML are not type-checked on construction, so types
    are checked first; range checks only run once every type is right.
    """
    errors = _type_errors(config)
    if errors:
        return errors

    if not config.registry_url.startswith(("http://", "https://")):
        errors.append(
            ConfigError(
                field="registry_url",
                message=f"registry_url must be an http(s) URL, got {config.registry_url!r}",
            )
        )
    if config.timeout <= 0:
        errors.append(ConfigError(field="timeout", message="timeout must be positive"))
    if not 1 <= config.search_size <= MAX_SEARCH_SIZE:
        errors.append(
            ConfigError(
                field="search_size",
                message=f"search_size must be between 1 and {MAX_SEARCH_SIZE}",
            )
        )
    if config.similarity_threshold < 0:
        errors.append(
            ConfigError(
                field="similarity_threshold",
                message="similarity_threshold cannot be negative",
            )
        )
    return errors
