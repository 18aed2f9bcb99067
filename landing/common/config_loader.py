"""
Configuration Loader

Loads YAML configuration files (site defaults, API defaults, CTA texts)
from the project's config/ directory.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    config_dir = PROJECT_ROOT / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'site.yaml')
        config_dir: Directory to read from (defaults to the project config/)

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = (config_dir or _get_config_dir()) / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_site_settings(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load site defaults.

    Returns:
        Dictionary with the 'site', 'api' and 'wholesale' sections

    Example:
        {
            'site': {'url': 'https://discor.com.ar', 'store_name': 'DisCor Mayorista', ...},
            'api': {'path': '/api/products/landing/pages', 'limit': 100, ...},
            'wholesale': {'cta_url': 'https://clientes.discor.com.ar', ...},
        }
    """
    return load_config('site.yaml', config_dir)
