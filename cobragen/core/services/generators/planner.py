"""
Content planner — decide which files a run writes, and how.

New project:  LICENSE, main.go, cmd/root.go (in that order).
Add command:  cmd/<name>.go, reusing the header block of cmd/root.go.

Code files come in two template variants: with the license header
block or with none at all. There is no partial header.
"""

from __future__ import annotations

import logging
import re

from cobragen.core.errors import IdentifierInvalidError, NoLicenseError
from cobragen.core.models.project import ROOT_COMMAND, Project
from cobragen.core.models.template import (
    ContentDescriptor,
    LicenseData,
    MainData,
    Omitted,
    PlannedContent,
    Rendered,
    RootData,
    SubCommandData,
)
from cobragen.core.services.templates import (
    ADD_COMMAND,
    MAIN,
    ROOT,
    TemplateStore,
    license_template,
    variant,
)

logger = logging.getLogger(__name__)

LICENSE_FILE = "LICENSE"
MAIN_FILE = "main.go"
ROOT_FILE = "root.go"

# Leading /* ... */ block directly followed by the package clause.
_HEADER_RE = re.compile(r"\A\s*/\*(?P<body>.*?)\*/\s*package\s+\w+", re.DOTALL)


def extract_license_header(root_source: bytes | str) -> str | None:
    """Return the trimmed interior of the header comment, if any.

    Only a block comment that opens the file and is immediately
    followed by ``package`` counts as a license header.
    """
    if isinstance(root_source, bytes):
        root_source = root_source.decode("utf-8", errors="replace")
    match = _HEADER_RE.match(root_source.replace("\r\n", "\n"))
    if match is None:
        return None
    header = match.group("body").strip()
    return header or None


def plan_new_project(project: Project, templates: TemplateStore) -> list[PlannedContent]:
    """Plan LICENSE, main.go and cmd/root.go for a fresh project.

    Raises:
        NoLicenseError: ``project.license`` has not been resolved.
        TemplateMissingError: A required template is not bundled.
    """
    legal = project.license
    if legal is None:
        raise NoLicenseError(project.root_path)

    with_header = not legal.is_none
    header = legal.header_text.strip()
    planned: list[PlannedContent] = []

    license_path = project.root_path / LICENSE_FILE
    if with_header:
        name = license_template(legal.code)
        planned.append(Rendered(descriptor=ContentDescriptor(
            name="license",
            target_path=license_path,
            template_source=templates.load(name, license_key=legal.key),
            bound_data=LicenseData(
                copyright_line=legal.copyright_line,
                display_name=legal.display_name,
            ),
        )))
    else:
        planned.append(Omitted(
            name="license",
            target_path=license_path,
            reason=f"license '{legal.key}' has no LICENSE file",
        ))

    planned.append(Rendered(descriptor=ContentDescriptor(
        name=MAIN,
        target_path=project.root_path / MAIN_FILE,
        template_source=templates.load(variant(MAIN, with_header)),
        bound_data=MainData(
            module_name=project.module_name,
            copyright_line=legal.copyright_line,
            header_text=header,
        ),
    )))

    planned.append(Rendered(descriptor=ContentDescriptor(
        name=ROOT,
        target_path=project.cmd_path / ROOT_FILE,
        template_source=templates.load(variant(ROOT, with_header)),
        bound_data=RootData(
            app_name=project.app_name,
            copyright_line=legal.copyright_line,
            header_text=header,
        ),
    )))

    logger.debug(
        "Planned %d files for %s (%d omitted)",
        len(planned),
        project.root_path,
        sum(1 for p in planned if isinstance(p, Omitted)),
    )
    return planned


def plan_add_command(
    project: Project,
    existing_root_file: bytes,
    templates: TemplateStore,
) -> Rendered:
    """Plan ``cmd/<command>.go`` for an existing project.

    The header block of the existing root file is copied verbatim; the
    license catalog is not consulted, since the project may carry an
    edited or foreign header.

    Raises:
        IdentifierInvalidError: No command name set on the project.
        TemplateMissingError: A required template is not bundled.
    """
    name = project.command_name
    if not name:
        raise IdentifierInvalidError(name or "", "no command name given")

    header = extract_license_header(existing_root_file)
    if header is None:
        logger.info("No license header in root file, using header-free template")

    descriptor = ContentDescriptor(
        name=ADD_COMMAND,
        target_path=project.cmd_path / f"{name}.go",
        template_source=templates.load(variant(ADD_COMMAND, header is not None)),
        bound_data=SubCommandData(
            parent_command=ROOT_COMMAND,
            command_name=name,
            module_name=project.module_name,
            app_name=project.app_name,
            header_text=header or "",
        ),
    )
    return Rendered(descriptor=descriptor)
