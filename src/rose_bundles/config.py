"""YAML settings loader for bundle resolution."""

import os
from pathlib import Path
from typing import Any

import yaml

from rose_bundles.models.pydantic_models import ResolverSettings

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_SETTINGS_PATH = PROJECT_ROOT / "config" / "settings.yaml"
DEFAULT_CATALOG_PATH = PROJECT_ROOT / "config" / "products.json"


def _get_settings_path() -> Path:
    """Get settings path from environment variable or default."""
    env_path = os.environ.get("ROSE_BUNDLES_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_SETTINGS_PATH


def load_settings(path: Path | None = None) -> ResolverSettings:
    """Load and validate resolver settings from YAML.

    Args:
        path: Path to YAML settings file. If None, uses ROSE_BUNDLES_CONFIG or
            config/settings.yaml, falling back to defaults when that is absent.

    Returns:
        Validated ResolverSettings instance.

    Raises:
        FileNotFoundError: If an explicitly given file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
        ValidationError: If settings don't match expected schema.
    """
    explicit = path is not None
    if path is None:
        path = _get_settings_path()

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Settings file not found: {path}")
        return ResolverSettings()

    with open(path, "r") as f:
        raw_settings: dict[str, Any] | None = yaml.safe_load(f)

    # Handle empty settings file
    if raw_settings is None:
        raw_settings = {}

    catalog_path = raw_settings.get("catalog_path")
    if catalog_path is not None:
        # Relative catalog paths are relative to the settings file
        catalog_path = path.parent / Path(catalog_path)

    return ResolverSettings(
        max_depth=raw_settings.get("max_depth", 8),
        catalog_path=catalog_path,
        seed_fixed_selections=raw_settings.get("seed_fixed_selections", False),
    )


def get_catalog_path(explicit: Path | None = None, settings: ResolverSettings | None = None) -> Path:
    """Pick the catalog snapshot to load.

    Priority:
        1. Explicit path argument
        2. ROSE_BUNDLES_CATALOG environment variable
        3. catalog_path from settings
        4. Default path (config/products.json)
    """
    if explicit is not None:
        return explicit
    if env_path := os.environ.get("ROSE_BUNDLES_CATALOG"):
        return Path(env_path)
    if settings is not None and settings.catalog_path is not None:
        return settings.catalog_path
    return DEFAULT_CATALOG_PATH
