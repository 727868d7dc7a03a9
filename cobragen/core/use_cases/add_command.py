"""
Add use case — attach a new sub-command to an existing application.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cobragen.core.errors import GeneratorError
from cobragen.core.models.project import Project
from cobragen.core.services.generators.project import (
    GeneratorState,
    ProjectGenerator,
    find_project_root,
)
from cobragen.core.services.gomod import detect_module_name
from cobragen.core.services.licenses import LicenseResolver, default_catalog
from cobragen.core.services.naming import normalize_command_name


@dataclass
class AddResult:
    """Result of the add use case."""

    command_name: str = ""
    project_root: Path | None = None
    module_name: str = ""
    file: Path | None = None
    license_key: str | None = None
    license_recognized: bool = False
    state: str = GeneratorState.INIT.value
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"command": self.command_name, "state": self.state}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        result["module"] = self.module_name
        result["file"] = str(self.file)
        result["license"] = self.license_key
        result["license_recognized"] = self.license_recognized
        return result


def add_command(
    raw_name: str,
    target: Path,
    resolver: LicenseResolver | None = None,
) -> AddResult:
    """Generate ``cmd/<name>.go`` in the project found at or above ``target``.

    The name is normalized first (``serve-http`` → ``serveHttp``).

    Returns:
        AddResult with the written file.
    """
    result = AddResult(command_name=normalize_command_name(raw_name))
    target = target.resolve()

    # Module path of the project root, not of a nested start directory
    root = find_project_root(target) or target
    project = Project(root_path=target, module_name=detect_module_name(root) or root.name)
    generator = ProjectGenerator(project, resolver or LicenseResolver(default_catalog()))

    try:
        project.set_command_name(result.command_name)
        result.file = generator.add_command()
    except (GeneratorError, OSError) as e:
        result.error = str(e)
        result.state = GeneratorState.FAILED.value
        return result

    result.state = generator.state.value
    result.project_root = project.root_path
    result.module_name = project.module_name
    if project.license is not None:
        result.license_key = project.license.key
    result.license_recognized = bool(generator.run.license_recognized)
    return result
