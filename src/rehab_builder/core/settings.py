"""
YAML → typed settings loader.

Loads the bundled settings.yaml, deep-merges the user override at
~/.rehab-builder/settings.yaml over it, then applies environment variables.

Usage:
    from rehab_builder.core.settings import load_settings
    settings = load_settings()
    settings.api_base_url

A bundled file that cannot be read leaves the Python defaults from
config.py in place.  A user override that fails to parse, or holds values of
the wrong type, is ignored with a warning.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .config import (
    API_TIMEOUT_ENV,
    API_URL_ENV,
    DEFAULT_API_BASE_URL,
    DEFAULT_BREAK_INTERVAL,
    DEFAULT_FREQUENCY,
    DEFAULT_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    default_frequency: int = DEFAULT_FREQUENCY
    default_break_interval: int = DEFAULT_BREAK_INTERVAL


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping; raises yaml.YAMLError / OSError on failure."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build Settings; raises ValueError/TypeError on wrongly typed values."""
    api = data.get("api") or {}
    schedule = data.get("schedule") or {}
    if not isinstance(api, dict) or not isinstance(schedule, dict):
        raise ValueError("'api' and 'schedule' must be mappings")
    return Settings(
        api_base_url=str(api.get("base_url", DEFAULT_API_BASE_URL)),
        timeout_seconds=float(api.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        default_frequency=int(schedule.get("frequency", DEFAULT_FREQUENCY)),
        default_break_interval=int(schedule.get("break_interval", DEFAULT_BREAK_INTERVAL)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_settings_path() -> Path:
    """Return the path of the bundled settings.yaml."""
    # settings.py lives at src/rehab_builder/core/settings.py
    return Path(__file__).parent.parent / "settings.yaml"


def get_user_settings_path() -> Path | None:
    """Return ~/.rehab-builder/settings.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".rehab-builder" / "settings.yaml"
    return p if p.exists() else None


def load_settings(
    user_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load and merge settings.

    Load order (later overrides earlier):
    1. Bundled src/rehab_builder/settings.yaml
    2. User override (``user_path`` or ~/.rehab-builder/settings.yaml)
    3. REHAB_BUILDER_API_URL / REHAB_BUILDER_TIMEOUT environment variables

    Returns:
        Settings
    """
    if environ is None:
        environ = os.environ

    data: dict[str, Any] = {}

    bundled = get_bundled_settings_path()
    if bundled.exists():
        try:
            data = _deep_merge(data, _load_yaml_file(bundled))
        except (OSError, yaml.YAMLError):
            data = {}

    user = user_path if user_path is not None else get_user_settings_path()
    if user is not None and user.exists():
        try:
            merged = _deep_merge(data, _load_yaml_file(user))
            _settings_from_dict(merged)
        except (OSError, yaml.YAMLError, TypeError, ValueError) as exc:
            warnings.warn(
                f"rehab-builder: ignoring user settings {user} ({exc})",
                stacklevel=2,
            )
        else:
            data = merged

    env_overrides: dict[str, Any] = {}
    if environ.get(API_URL_ENV):
        env_overrides["base_url"] = environ[API_URL_ENV]
    if environ.get(API_TIMEOUT_ENV):
        try:
            env_overrides["timeout_seconds"] = float(environ[API_TIMEOUT_ENV])
        except ValueError:
            warnings.warn(
                f"rehab-builder: {API_TIMEOUT_ENV}={environ[API_TIMEOUT_ENV]!r} "
                "is not a number; ignored",
                stacklevel=2,
            )
    if env_overrides:
        data = _deep_merge(data, {"api": env_overrides})

    return _settings_from_dict(data)
