"""
Config check use case — validate .cobra.yaml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cobragen.core.config.loader import ConfigError, find_config_file, load_config
from cobragen.core.models.config import DEFAULT_AUTHOR, GeneratorConfig, is_valid_year
from cobragen.core.services.licenses import LicenseCatalog, default_catalog


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: GeneratorConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump() if self.config else None,
        }


def check_config(
    config_path: Path | None = None,
    catalog: LicenseCatalog | None = None,
) -> ConfigCheckResult:
    """Validate generator configuration and report issues.

    A missing file is valid (defaults apply) but produces a warning.
    """
    result = ConfigCheckResult()
    catalog = catalog or default_catalog()

    if config_path is None:
        config_path = find_config_file()
    result.config_path = config_path

    if config_path is None:
        result.warnings.append("No .cobra.yaml found; built-in defaults apply.")

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    if config.license not in catalog:
        hint = catalog.find_by_alias(config.license)
        suggestion = f" Did you mean '{hint.key}'?" if hint else ""
        result.errors.append(
            f"Unknown license '{config.license}'.{suggestion} "
            f"Known keys: {', '.join(catalog.keys())}"
        )

    if config.year and not is_valid_year(config.year):
        result.errors.append(f"Year must be four digits, got '{config.year}'")

    if config.author == DEFAULT_AUTHOR:
        result.warnings.append("Author is the placeholder value; set 'author' in .cobra.yaml.")

    result.valid = len(result.errors) == 0
    return result
