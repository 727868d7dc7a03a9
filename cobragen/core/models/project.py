"""
Project model — the application being generated or extended.

Built once per invocation from CLI/config inputs and changed only
through its setters before generation starts.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from cobragen.core.models.license import LicenseRecord
from cobragen.core.services.naming import validate_command_name

# Variable name of the root command in every generated project.
ROOT_COMMAND = "rootCmd"


class Project(BaseModel):
    """Target application.

    ``app_name`` defaults to the last segment of ``root_path``.
    ``command_name`` is only set by the add-command workflow.
    ``license`` stays ``None`` until the resolver has run.
    """

    root_path: Path
    module_name: str
    app_name: str = ""
    command_name: str | None = None
    license: LicenseRecord | None = None

    def model_post_init(self, __context: object) -> None:
        self.root_path = self.root_path.resolve()
        if not self.app_name:
            self.app_name = self.root_path.name

    @property
    def cmd_path(self) -> Path:
        return self.root_path / "cmd"

    def set_module_name(self, value: str) -> None:
        self.module_name = value

    def set_app_name(self, value: str) -> None:
        self.app_name = value

    def set_root_path(self, value: Path) -> None:
        self.root_path = value.resolve()

    def set_command_name(self, value: str) -> None:
        """Set the sub-command name, rejecting invalid identifiers."""
        validate_command_name(value)
        self.command_name = value

    def set_license(self, value: LicenseRecord) -> None:
        self.license = value
