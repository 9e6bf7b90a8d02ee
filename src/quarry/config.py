"""Configuration loading utilities for Quarry.

This module provides configuration loading for the CLI and for applications
using Quarry as a library. It handles:
- Finding and loading quarry.yaml config files
- Loading .env files for API keys
- Building Settings objects from YAML and QUARRY_* environment variables
- Creating Quarry instances from configuration
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from quarry.quarry import Quarry
    from quarry.settings import Settings

logger = logging.getLogger(__name__)

CONFIG_FILES = ["quarry.yaml", "quarry.yml", ".quarryrc"]
ENV_FILE = ".env"


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("\"'")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in the current directory or its parents.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {"provider", "settings"}

VALID_PROVIDER_KEYS = {"llm", "fallback_llm", "embedding", "fallback_embedding"}

VALID_SETTINGS_KEYS = {
    "question_count",
    "difficulty",
    "language",
    "chunk_size",
    "chunk_overlap",
    "probe_k",
    "max_context_chars",
    "temperature",
    "top_p",
    "top_k",
    "max_output_tokens",
    "rag_prompt",
    "direct_prompt",
    "use_direct_fallback",
    "max_retries",
    "retry_base_delay_ms",
    "max_retry_delay_ms",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    sections = (("provider", VALID_PROVIDER_KEYS), ("settings", VALID_SETTINGS_KEYS))
    for section, valid_keys in sections:
        values = config.get(section, {})
        if isinstance(values, dict):
            unknown = set(values.keys()) - valid_keys
            if unknown:
                warnings.append(f"Unknown {section} keys: {', '.join(sorted(unknown))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)

    Raises:
        OSError: An explicit config_path cannot be read.
        yaml.YAMLError: The file is not valid YAML.
        ValueError: The file does not hold a mapping at the top level.
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        kind = type(config).__name__
        raise ValueError(f"Config file {config_path} must contain a mapping, got {kind}")

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from QUARRY_* environment variables.

    Returns only values that were explicitly (and validly) set, so YAML
    settings are used unless overridden.
    """
    result: dict[str, Any] = {}

    for name in ("question_count", "chunk_size", "chunk_overlap", "probe_k", "max_retries"):
        if (val := _safe_int(os.environ.get(f"QUARRY_{name.upper()}"))) is not None:
            result[name] = val
    if (val := _safe_float(os.environ.get("QUARRY_TEMPERATURE"))) is not None:
        result["temperature"] = val
    if (val := _safe_float(os.environ.get("QUARRY_RETRY_BASE_DELAY_MS"))) is not None:
        result["retry_base_delay_ms"] = val
    if os.environ.get("QUARRY_DIFFICULTY"):
        result["difficulty"] = os.environ["QUARRY_DIFFICULTY"].lower()
    if os.environ.get("QUARRY_LANGUAGE"):
        result["language"] = os.environ["QUARRY_LANGUAGE"]
    if "QUARRY_USE_DIRECT_FALLBACK" in os.environ:
        result["use_direct_fallback"] = os.environ["QUARRY_USE_DIRECT_FALLBACK"].lower() in (
            "true",
            "1",
            "yes",
        )

    return result


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build a Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)
    """
    from quarry.settings import Settings

    config = config or {}
    yaml_settings = {
        key: value
        for key, value in _section(config, "settings").items()
        if key in VALID_SETTINGS_KEYS
    }
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    return Settings(**{**yaml_settings, **env_settings})


def create_quarry(config_path: Path | str | None = None) -> Quarry:
    """Create a Quarry instance from a config file, .env and environment.

    The YAML `provider:` section maps onto LiteLLMProvider fields; missing
    fields keep the LiteLLMProvider defaults.
    """
    from quarry.configuration import LiteLLMProvider
    from quarry.quarry import Quarry

    load_env_file()
    config = load_config(config_path)
    for warning in validate_config(config, Path(config_path) if config_path else None):
        logger.warning(warning)
    provider_config = {
        key: value
        for key, value in _section(config, "provider").items()
        if key in VALID_PROVIDER_KEYS
    }
    return Quarry(provider=LiteLLMProvider(**provider_config), settings=build_settings(config))
