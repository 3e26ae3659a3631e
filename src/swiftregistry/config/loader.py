"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
An empty or missing config yields the defaults of RegistryConfig.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from swiftregistry.config.settings import RegistryConfig


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping at top level"
        raise ValueError(msg)
    return _process_config_values(data) if data else {}


def load_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> RegistryConfig:
    """
    Load registry configuration from YAML file(s).

    Every section is optional; unspecified values fall back to defaults.

    Args:
        config_path: Path to the main configuration file, or None for defaults.
        base_path: Optional path to base configuration for inheritance.
            When omitted, a base.yaml next to config_path is used if present.

    Returns:
        Fully validated RegistryConfig instance.
    """
    if config_path is None:
        return RegistryConfig()

    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base.resolve() != config_path.resolve():
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    merged = _deep_merge(base_data, load_yaml(config_path))

    unknown = set(merged) - set(RegistryConfig.model_fields)
    if unknown:
        msg = f"Unknown config section(s): {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    return RegistryConfig.model_validate(merged)
