"""Tests for modgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from modgen.config import ConfigError, ModgenConfig, load_config
from modgen.reference.fetcher import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from modgen.stubs.formatter import StubPolicy


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ModgenConfig)
    assert config.root == tmp_path.resolve()
    assert config.reference.base_url == DEFAULT_BASE_URL
    assert config.reference.timeout == DEFAULT_TIMEOUT
    assert config.stubs.policy is StubPolicy.PANIC
    assert config.stubs.excluded_methods() == frozenset({"Close", "Name", "Reconfigure"})
    assert config.templates_dir is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".modgen.yml"
    config_file.write_text(
        """
reference:
  base_url: "http://mirror.local/rdk"
  timeout: 5
stubs:
  policy: zero_values
  exclusion_version: 1
  extra_excluded:
    - DoCommand
templates:
  dir: "templates"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.reference.base_url == "http://mirror.local/rdk"
    assert config.reference.timeout == pytest.approx(5.0)
    assert config.stubs.policy is StubPolicy.ZERO_VALUES
    assert config.stubs.exclusion_version == "1"
    assert config.stubs.excluded_methods() == frozenset({"Close", "DoCommand"})
    assert config.templates_dir == tmp_path.resolve() / "templates"


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".modgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.stubs.policy is StubPolicy.PANIC


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "mapping at the root"),
        ("stubs:\n  policy: maybe\n", "Unknown stub policy"),
        ("stubs:\n  exclusion_version: 7\n", "Unknown exclusion_version"),
        ("reference: [unclosed\n", "Failed to parse"),
        ("reference:\n  timeout: 30s\n", "Invalid reference.timeout"),
        ("reference:\n  timeout: -1\n", "Invalid reference.timeout"),
        ("reference:\n  timeout: true\n", "Invalid reference.timeout"),
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".modgen.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)


def test_load_config_null_timeout_disables_it(tmp_path: Path) -> None:
    (tmp_path / ".modgen.yml").write_text("reference:\n  timeout: null\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.reference.timeout is None
