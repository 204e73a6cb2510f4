"""Configuration loading for modgen (.modgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .reference.fetcher import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .stubs.extractor import DEFAULT_EXCLUSION_VERSION, EXCLUSION_SETS, exclusion_set
from .stubs.formatter import StubPolicy

CONFIG_FILENAME = ".modgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ReferenceConfig:
    """Where reference client sources are fetched from."""

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT


@dataclass
class StubsConfig:
    """Stub synthesis settings."""

    policy: StubPolicy = StubPolicy.PANIC
    exclusion_version: str = DEFAULT_EXCLUSION_VERSION
    extra_excluded: List[str] = field(default_factory=list)

    def excluded_methods(self) -> frozenset[str]:
        return exclusion_set(self.exclusion_version, self.extra_excluded)


@dataclass
class ModgenConfig:
    """Represents the settings defined in .modgen.yml."""

    root: Path
    reference: ReferenceConfig = field(default_factory=ReferenceConfig)
    stubs: StubsConfig = field(default_factory=StubsConfig)
    templates_dir: Optional[Path] = None


def default_config(root: Path | None = None) -> ModgenConfig:
    return ModgenConfig(root=(root or Path.cwd()).resolve())


def load_config(config_path: Path) -> ModgenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ModgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    reference = ReferenceConfig()
    reference_data = _as_dict(data.get("reference"))
    if reference_data:
        base_url = _as_str(reference_data.get("base_url"))
        if base_url:
            reference.base_url = base_url
        if "timeout" in reference_data:
            raw_timeout = reference_data.get("timeout")
            timeout = _as_float(raw_timeout)
            if raw_timeout is not None and (timeout is None or timeout <= 0):
                raise ConfigError(
                    f"Invalid reference.timeout {raw_timeout!r}; "
                    "expected a positive number of seconds or null"
                )
            reference.timeout = timeout

    stubs = StubsConfig()
    stubs_data = _as_dict(data.get("stubs"))
    if stubs_data:
        policy = _as_str(stubs_data.get("policy"))
        if policy:
            try:
                stubs.policy = StubPolicy(policy.lower())
            except ValueError as exc:
                choices = ", ".join(item.value for item in StubPolicy)
                raise ConfigError(f"Unknown stub policy {policy!r}; expected one of {choices}") from exc
        version = _as_str(stubs_data.get("exclusion_version"))
        if version:
            if version not in EXCLUSION_SETS:
                known = ", ".join(sorted(EXCLUSION_SETS))
                raise ConfigError(
                    f"Unknown exclusion_version {version!r}; known versions: {known}"
                )
            stubs.exclusion_version = version
        stubs.extra_excluded = _as_str_list(stubs_data.get("extra_excluded"))

    templates_data = _as_dict(data.get("templates"))
    templates_dir_str = _as_str(templates_data.get("dir")) if templates_data else None
    templates_dir = root / templates_dir_str if templates_dir_str else None

    return ModgenConfig(
        root=root,
        reference=reference,
        stubs=stubs,
        templates_dir=templates_dir,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ModgenConfig",
    "ReferenceConfig",
    "StubsConfig",
    "default_config",
    "load_config",
]
