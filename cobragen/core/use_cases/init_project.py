"""
Init use case — create a new Cobra application skeleton.

Resolves the module name, builds the project descriptor and runs the
project generator. Failures come back as ``result.error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cobragen.core.errors import GeneratorError
from cobragen.core.models.project import Project
from cobragen.core.services.generators.project import GeneratorState, ProjectGenerator
from cobragen.core.services.gomod import detect_module_name
from cobragen.core.services.licenses import LicenseResolver, default_catalog

logger = logging.getLogger(__name__)


@dataclass
class InitResult:
    """Result of the init use case."""

    project_root: Path | None = None
    module_name: str = ""
    app_name: str = ""
    license_key: str = ""
    files: list[Path] = field(default_factory=list)
    omitted: list[str] = field(default_factory=list)
    state: str = GeneratorState.INIT.value
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            result["state"] = self.state
            return result

        result["project_root"] = str(self.project_root)
        result["module"] = self.module_name
        result["app_name"] = self.app_name
        result["license"] = self.license_key
        result["files"] = [str(f) for f in self.files]
        result["omitted"] = self.omitted
        result["state"] = self.state
        return result


def init_project(
    target: Path,
    license_key: str = "none",
    author: str = "",
    year: str | None = None,
    module_name: str | None = None,
    app_name: str | None = None,
    resolver: LicenseResolver | None = None,
) -> InitResult:
    """Generate main.go, cmd/root.go and LICENSE under ``target``.

    Args:
        target: Project directory (created if missing).
        license_key: Catalog key; unknown keys mean no license.
        author: Copyright holder.
        year: Copyright year, default current year.
        module_name: Go import path; detected from go.mod when omitted.
        app_name: Root command name; defaults to the directory name.
        resolver: License resolver override.

    Returns:
        InitResult with the written files.
    """
    result = InitResult()
    target = target.resolve()

    if not module_name:
        module_name = detect_module_name(target)
        if module_name is None:
            module_name = app_name or target.name
            logger.warning(
                "No go.mod found for %s; using '%s' as module name "
                "(run 'go mod init' to set it)",
                target, module_name,
            )

    project = Project(root_path=target, module_name=module_name, app_name=app_name or "")
    result.project_root = project.root_path
    result.module_name = project.module_name
    result.app_name = project.app_name

    generator = ProjectGenerator(
        project,
        resolver or LicenseResolver(default_catalog()),
        license_key=license_key,
        author=author,
        year=year,
    )

    try:
        result.files = generator.create_project()
    except (GeneratorError, OSError) as e:
        result.error = str(e)
    finally:
        result.state = generator.state.value

    if project.license is not None:
        result.license_key = project.license.key
    result.omitted = [str(o.target_path) for o in generator.run.omitted]
    return result
