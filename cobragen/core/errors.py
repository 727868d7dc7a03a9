"""
Generator errors — every failure the core can raise.

Core services raise these; use cases catch ``GeneratorError`` and turn
it into ``result.error``; the CLI prints that message and exits 1.
Filesystem failures are not wrapped, they surface as ``OSError``.
"""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for all scaffolding failures."""


class NoLicenseError(GeneratorError):
    """Generation was requested before a license record was resolved."""

    def __init__(self, root_path: Path | None = None) -> None:
        self.root_path = root_path
        where = f" for {root_path}" if root_path else ""
        super().__init__(f"No license resolved{where}; cannot plan project files")


class TemplateMissingError(GeneratorError):
    """A named template resource could not be loaded."""

    def __init__(self, name: str, license_key: str | None = None) -> None:
        self.name = name
        self.license_key = license_key
        detail = f" (required by license '{license_key}')" if license_key else ""
        super().__init__(f"Template '{name}' not found{detail}")


class TemplateRenderError(GeneratorError):
    """A template failed to parse or execute."""

    def __init__(self, name: str, target_path: Path, cause: Exception) -> None:
        self.name = name
        self.target_path = target_path
        super().__init__(f"Cannot render '{name}' into {target_path}: {cause}")


class ProjectStructureInvalidError(GeneratorError):
    """The target is not a recognizable generated project."""

    def __init__(self, start_path: Path, missing: list[str]) -> None:
        self.start_path = start_path
        self.missing = missing
        super().__init__(
            f"No generated project found at or above {start_path} "
            f"(missing: {', '.join(missing)})"
        )


class IdentifierInvalidError(GeneratorError):
    """A command name is empty, malformed, or collides with the root command."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid command name '{name}': {reason}")
