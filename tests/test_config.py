# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration validation and layered loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from diagbridge.config import Config
from diagbridge.config_loader import ConfigLoader, TomlConfigSource
from diagbridge.errors import ConfigError


def test_defaults() -> None:
    config = Config()

    assert config.debounce_seconds == 0.5
    assert config.timeout_seconds == 5.0
    assert config.build_timeout_seconds == 600.0
    assert config.build_profiles == ("release", "debug")
    assert config.tool_override_paths == {}


def test_camel_case_keys_are_accepted() -> None:
    config = Config.from_mapping(
        {"toolOverridePaths": {"compiler": "/opt/veyc", "linter": "  "}, "debounceMs": 250, "timeoutMs": 1000},
    )

    assert config.override_for("compiler") == "/opt/veyc"
    assert config.override_for("linter") is None
    assert config.debounce_ms == 250
    assert config.timeout_ms == 1000


@pytest.mark.parametrize("value", [99, 5001])
def test_debounce_outside_bounds_is_rejected(value: int) -> None:
    with pytest.raises(ConfigError):
        Config.from_mapping({"debounce_ms": value})


def test_empty_build_profiles_are_rejected() -> None:
    with pytest.raises(ConfigError):
        Config.from_mapping({"build_profiles": []})


def test_loader_layers_pyproject_under_project_file(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        textwrap.dedent(
            """
            [tool.diagbridge]
            debounceMs = 800
            timeout_ms = 2000

            [tool.diagbridge.tool_override_paths]
            compiler = "/from/pyproject/veyc"
            linter = "/from/pyproject/lint"
            """,
        ),
        encoding="utf-8",
    )
    (tmp_path / ".diagbridge.toml").write_text(
        textwrap.dedent(
            """
            debounce_ms = 300

            [toolOverridePaths]
            compiler = "/from/project/veyc"
            """,
        ),
        encoding="utf-8",
    )

    config = ConfigLoader.for_root(tmp_path).load()

    assert config.debounce_ms == 300
    assert config.timeout_ms == 2000
    assert config.tool_override_paths == {
        "compiler": "/from/project/veyc",
        "linter": "/from/pyproject/lint",
    }
    assert config.workspace_root == tmp_path.resolve()


def test_loader_resolves_relative_workspace_root(tmp_path: Path) -> None:
    (tmp_path / ".diagbridge.toml").write_text('workspace_root = "sub"\n', encoding="utf-8")

    config = ConfigLoader.for_root(tmp_path).load()

    assert config.workspace_root == (tmp_path / "sub").resolve()


def test_environment_variables_are_expanded(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('[tool_override_paths]\ncompiler = "${TOOLCHAIN_HOME}/bin/veyc"\n', encoding="utf-8")

    data = TomlConfigSource(path, env={"TOOLCHAIN_HOME": "/opt/toolchain"}).load()

    assert data["tool_override_paths"]["compiler"] == "/opt/toolchain/bin/veyc"


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".diagbridge.toml").write_text("debounce_ms = = 1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        ConfigLoader.for_root(tmp_path).load()


def test_invalid_values_raise_config_error(tmp_path: Path) -> None:
    (tmp_path / ".diagbridge.toml").write_text("debounce_ms = 10\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigLoader.for_root(tmp_path).load()
