"""
Configuration loader — reads ``.cobra.yaml`` into a ``GeneratorConfig``.

Search order: explicit path, ``COBRAGEN_CONFIG``, the current directory
and its parents, then the home directory. No file at all is fine:
defaults apply.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from cobragen.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = ".cobra.yaml"
CONFIG_ENV = "COBRAGEN_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None, home: Path | None = None) -> Path | None:
    """Search for .cobra.yaml starting from the given directory, walking up.

    Falls back to the home directory when no ancestor has one.

    Args:
        start_dir: Directory to start searching from (default: cwd).
        home: Home directory override (default: ``Path.home()``).

    Returns:
        Path to the config file, or None if not found.
    """
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)

    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    try:
        home_candidate = (home or Path.home()) / CONFIG_FILE
    except RuntimeError:
        return None
    return home_candidate if home_candidate.is_file() else None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load generator defaults.

    Args:
        path: Explicit config path. If None, searches as described above.

    Returns:
        Validated GeneratorConfig (defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return GeneratorConfig()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        raise ConfigError(f"Config file from ${CONFIG_ENV} not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return GeneratorConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s (license '%s')", path, config.license)
    return config
