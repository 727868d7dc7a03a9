"""
Content models — what the planner produces and the renderer consumes.

Each file to write is a ``ContentDescriptor``. Its ``bound_data`` is one
of four tagged variants, each carrying exactly what its template needs.
The planner wraps descriptors as ``Rendered``; a file that must not be
written (the LICENSE of a ``none`` project) is an ``Omitted`` instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class MainData(BaseModel):
    """Namespace for ``main`` / ``main_none``."""

    kind: Literal["main"] = "main"
    module_name: str
    copyright_line: str = ""
    header_text: str = ""

    def context(self) -> dict[str, Any]:
        return {
            "module_name": self.module_name,
            "copyright_line": self.copyright_line,
            "header_text": self.header_text,
        }


class RootData(BaseModel):
    """Namespace for ``root`` / ``root_none``."""

    kind: Literal["root"] = "root"
    app_name: str
    copyright_line: str = ""
    header_text: str = ""

    def context(self) -> dict[str, Any]:
        return {
            "app_name": self.app_name,
            "copyright_line": self.copyright_line,
            "header_text": self.header_text,
        }


class LicenseData(BaseModel):
    """Namespace for ``license_<code>``."""

    kind: Literal["license"] = "license"
    copyright_line: str
    display_name: str = ""

    def context(self) -> dict[str, Any]:
        return {
            "copyright_line": self.copyright_line,
            "display_name": self.display_name,
        }


class SubCommandData(BaseModel):
    """Namespace for ``add_command`` / ``add_command_none``.

    ``header_text`` is the header block recovered from the project's
    existing ``cmd/root.go``, reused verbatim.
    """

    kind: Literal["add_command"] = "add_command"
    parent_command: str
    command_name: str
    module_name: str
    app_name: str
    header_text: str = ""

    def context(self) -> dict[str, Any]:
        return {
            "parent_command": self.parent_command,
            "command_name": self.command_name,
            "module_name": self.module_name,
            "app_name": self.app_name,
            "header_text": self.header_text,
        }


BoundData = Annotated[
    Union[MainData, RootData, LicenseData, SubCommandData],
    Field(discriminator="kind"),
]


class ContentDescriptor(BaseModel):
    """One file to materialize.

    Attributes:
        name:            Logical template key (main, root, license, add_command).
        target_path:     Destination file.
        template_source: Template text, already loaded.
        bound_data:      Tagged data variant the template is rendered with.
    """

    name: str
    target_path: Path
    template_source: str
    bound_data: BoundData


class Rendered(BaseModel):
    """Planner outcome: this descriptor must be written."""

    outcome: Literal["rendered"] = "rendered"
    descriptor: ContentDescriptor

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def target_path(self) -> Path:
        return self.descriptor.target_path


class Omitted(BaseModel):
    """Planner outcome: this file is deliberately not written."""

    outcome: Literal["omitted"] = "omitted"
    name: str
    target_path: Path
    reason: str


PlannedContent = Union[Rendered, Omitted]
