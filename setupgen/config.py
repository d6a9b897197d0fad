"""Configuration loading for setupgen (.setupgen.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .auth import DEFAULT_ENV_KEYS

CONFIG_FILENAME = ".setupgen.yml"
ENV_PRICING_BASE_URL = "SETUPGEN_PRICING_BASE_URL"
PRICING_SOURCES = ("http", "file", "none")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ResourceConfig:
    """Locations of the static template, snippet library and prompt."""

    directory: Optional[Path] = None
    template: Optional[str] = None
    snippets: Optional[str] = None
    analysis_prompt: Optional[str] = None
    templates_dir: Optional[Path] = None


@dataclass
class PricingStoreConfig:
    """Where the default pricing model is fetched from."""

    source: str = "http"
    base_url: Optional[str] = None
    file: Optional[Path] = None
    request_timeout: Optional[float] = None


@dataclass
class AuthConfig:
    """Environment variables consulted for the fallback API key."""

    env_keys: List[str] = field(default_factory=lambda: list(DEFAULT_ENV_KEYS))


@dataclass
class ServiceConfig:
    """Bind address for service mode."""

    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class SetupGenConfig:
    """Represents the settings defined in .setupgen.yml."""

    root: Path
    resources: ResourceConfig = field(default_factory=ResourceConfig)
    pricing: PricingStoreConfig = field(default_factory=PricingStoreConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)


def load_config(config_path: Path) -> SetupGenConfig:
    """Load configuration from disk, applying environment overrides."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return _apply_env_overrides(SetupGenConfig(root=root))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    resources_data = _as_dict(data.get("resources"))
    directory = _as_str(resources_data.get("dir"))
    templates_dir = _as_str(resources_data.get("templates_dir"))
    resources = ResourceConfig(
        directory=root / directory if directory else None,
        template=_as_str(resources_data.get("template")),
        snippets=_as_str(resources_data.get("snippets")),
        analysis_prompt=_as_str(resources_data.get("analysis_prompt")),
        templates_dir=root / templates_dir if templates_dir else None,
    )

    pricing_data = _as_dict(data.get("pricing"))
    source = (_as_str(pricing_data.get("source")) or "http").lower()
    if source not in PRICING_SOURCES:
        raise ConfigError(
            f"pricing.source must be one of {', '.join(PRICING_SOURCES)}, got '{source}'"
        )
    pricing_file = _as_str(pricing_data.get("file"))
    pricing = PricingStoreConfig(
        source=source,
        base_url=_as_str(pricing_data.get("base_url")),
        file=root / pricing_file if pricing_file else None,
        request_timeout=_as_float(pricing_data.get("request_timeout")),
    )
    if pricing.source == "file" and pricing.file is None:
        raise ConfigError("pricing.file is required when pricing.source is 'file'")

    auth = AuthConfig()
    env_keys = _as_str_list(_as_dict(data.get("auth")).get("env_keys"))
    if env_keys:
        auth.env_keys = env_keys

    service_data = _as_dict(data.get("service"))
    service = ServiceConfig()
    host = _as_str(service_data.get("host"))
    port = _as_int(service_data.get("port"))
    if host:
        service.host = host
    if port is not None:
        service.port = port

    config = SetupGenConfig(
        root=root,
        resources=resources,
        pricing=pricing,
        auth=auth,
        service=service,
    )
    return _apply_env_overrides(config)


def _apply_env_overrides(config: SetupGenConfig) -> SetupGenConfig:
    base_url = os.getenv(ENV_PRICING_BASE_URL)
    if base_url:
        config.pricing.base_url = base_url
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
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
    "AuthConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "PricingStoreConfig",
    "ResourceConfig",
    "ServiceConfig",
    "SetupGenConfig",
    "load_config",
]
