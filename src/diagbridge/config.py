# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for the diagnostic bridge."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .errors import ConfigError

MIN_DEBOUNCE_MS: Final[int] = 100
MAX_DEBOUNCE_MS: Final[int] = 5000
DEFAULT_DEBOUNCE_MS: Final[int] = 500
DEFAULT_TIMEOUT_MS: Final[int] = 5000
DEFAULT_PROBE_TIMEOUT_MS: Final[int] = 5000
DEFAULT_BUILD_TIMEOUT_MS: Final[int] = 600_000
MAX_ANCESTOR_DEPTH: Final[int] = 3
DEFAULT_BUILD_PROFILES: Final[tuple[str, ...]] = ("release", "debug")


class Config(BaseModel):
    """Options recognised by the bridge.

    Keys may be given in snake_case or in the camelCase spelling used by
    editor settings (``toolOverridePaths``, ``debounceMs``, ``timeoutMs``).
    """

    model_config = ConfigDict(
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    workspace_root: Path | None = None
    tool_override_paths: dict[str, str] = Field(default_factory=dict)
    debounce_ms: int = Field(default=DEFAULT_DEBOUNCE_MS, ge=MIN_DEBOUNCE_MS, le=MAX_DEBOUNCE_MS)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    probe_timeout_ms: int = Field(default=DEFAULT_PROBE_TIMEOUT_MS, gt=0)
    build_timeout_ms: int = Field(default=DEFAULT_BUILD_TIMEOUT_MS, gt=0)
    ancestor_depth: int = Field(default=MAX_ANCESTOR_DEPTH, ge=0, le=MAX_ANCESTOR_DEPTH)
    build_profiles: tuple[str, ...] = DEFAULT_BUILD_PROFILES
    deduplicate_diagnostics: bool = True

    @field_validator("tool_override_paths", mode="after")
    @classmethod
    def _drop_blank_overrides(cls, value: dict[str, str]) -> dict[str, str]:
        """Ignore overrides configured as empty strings."""
        return {name: path.strip() for name, path in value.items() if path and path.strip()}

    @field_validator("build_profiles", mode="after")
    @classmethod
    def _require_profiles(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one build profile is required")
        return value

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def probe_timeout_seconds(self) -> float:
        return self.probe_timeout_ms / 1000

    @property
    def build_timeout_seconds(self) -> float:
        return self.build_timeout_ms / 1000

    def override_for(self, logical_name: str) -> str | None:
        """Return the user-configured path for ``logical_name`` if any."""
        return self.tool_override_paths.get(logical_name)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain data keyed by field name."""
        return self.model_dump(mode="json")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Validate ``data`` into a :class:`Config`.

        Raises:
            ConfigError: When ``data`` holds invalid values.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_BUILD_PROFILES",
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_TIMEOUT_MS",
    "MAX_ANCESTOR_DEPTH",
    "MAX_DEBOUNCE_MS",
    "MIN_DEBOUNCE_MS",
]
