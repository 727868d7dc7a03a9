"""
Project generator — run the "create project" and "add command" workflows.

Each run walks a fixed state machine:

    INIT → DIRECTORY_ENSURED → PLANNED → RENDERED → DONE

Any exception moves the run to FAILED and is re-raised. Nothing is
retried or rolled back; files written before the failure stay on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from cobragen.core.errors import NoLicenseError, ProjectStructureInvalidError
from cobragen.core.models.project import Project
from cobragen.core.models.template import Omitted, PlannedContent
from cobragen.core.services.generators.planner import (
    LICENSE_FILE,
    ROOT_FILE,
    plan_add_command,
    plan_new_project,
)
from cobragen.core.services.generators.renderer import render_outcome
from cobragen.core.services.licenses import LicenseResolver

logger = logging.getLogger(__name__)

_CMD_DIR = "cmd"


class GeneratorState(str, Enum):
    INIT = "init"
    DIRECTORY_ENSURED = "directory_ensured"
    PLANNED = "planned"
    RENDERED = "rendered"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationRun:
    """Trace of one workflow run."""

    state: GeneratorState = GeneratorState.INIT
    history: list[GeneratorState] = field(default_factory=lambda: [GeneratorState.INIT])
    planned: list[PlannedContent] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    license_recognized: bool | None = None
    error: str | None = None

    def advance(self, state: GeneratorState) -> None:
        logger.debug("Generator %s → %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    @property
    def omitted(self) -> list[Omitted]:
        return [p for p in self.planned if isinstance(p, Omitted)]


def find_project_root(start: Path) -> Path | None:
    """Walk upward from ``start`` to a directory with LICENSE and cmd/root.go."""
    current = start.resolve()
    while True:
        if (current / LICENSE_FILE).is_file() and (current / _CMD_DIR / ROOT_FILE).is_file():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _missing_files(start: Path) -> list[str]:
    """Which of the two marker files cannot be found above ``start``."""
    missing = []
    for marker in (Path(LICENSE_FILE), Path(_CMD_DIR) / ROOT_FILE):
        if not any((d / marker).is_file() for d in (start, *start.parents)):
            missing.append(str(marker))
    return missing or [f"{LICENSE_FILE} and {_CMD_DIR}/{ROOT_FILE} in one directory"]


class ProjectGenerator:
    """Coordinates resolver, planner and renderer for one project.

    Args:
        project:     Target descriptor; its license may still be unset.
        resolver:    License resolver with the injected catalog.
        license_key: License requested for a new project.
        author:      Copyright holder.
        year:        Copyright year (default: current year).
    """

    def __init__(
        self,
        project: Project,
        resolver: LicenseResolver,
        license_key: str = "none",
        author: str = "",
        year: str | None = None,
    ) -> None:
        self.project = project
        self.resolver = resolver
        self.templates = resolver.templates
        self.license_key = license_key
        self.author = author
        self.year = year
        self.run = GenerationRun()

    @property
    def state(self) -> GeneratorState:
        return self.run.state

    # ── Create project ──────────────────────────────────────────

    def create_project(self) -> list[Path]:
        """Write LICENSE (unless ``none``), main.go and cmd/root.go.

        Returns:
            Paths written, in order.
        """
        self.run = GenerationRun()
        try:
            self._ensure_directories()

            if self.project.license is None:
                self.project.set_license(
                    self.resolver.resolve(self.license_key, self.author, self.year)
                )
            if self.project.license is None:
                raise NoLicenseError(self.project.root_path)

            self.run.planned = plan_new_project(self.project, self.templates)
            self.run.advance(GeneratorState.PLANNED)

            self._render_all()
        except Exception as e:
            self._fail(e)
            raise

        logger.info(
            "Created project '%s' at %s (%d files)",
            self.project.app_name, self.project.root_path, len(self.run.written),
        )
        return list(self.run.written)

    # ── Add command ─────────────────────────────────────────────

    def add_command(self) -> Path:
        """Write cmd/<command>.go into the project found above ``root_path``.

        Raises:
            ProjectStructureInvalidError: No LICENSE + cmd/root.go pair found.
            IdentifierInvalidError: Command name missing or invalid.
        """
        self.run = GenerationRun()
        try:
            start = self.project.root_path
            root = find_project_root(start)
            if root is None:
                raise ProjectStructureInvalidError(start, _missing_files(start))
            if root != start:
                logger.info("Using project root %s", root)
                self.project.set_root_path(root)
            self._ensure_directories()

            root_source = (self.project.cmd_path / ROOT_FILE).read_bytes()
            license_bytes = (self.project.root_path / LICENSE_FILE).read_bytes()

            record, found = self.resolver.identify(
                license_bytes, root_source.decode("utf-8", errors="replace")
            )
            self.run.license_recognized = found
            if found:
                logger.info("Existing project is licensed '%s'", record.key)
            else:
                logger.warning(
                    "LICENSE at %s does not match any known license",
                    self.project.root_path / LICENSE_FILE,
                )
            self.project.set_license(record)

            planned = plan_add_command(self.project, root_source, self.templates)
            if planned.target_path.exists():
                logger.warning("Overwriting existing %s", planned.target_path)
            self.run.planned = [planned]
            self.run.advance(GeneratorState.PLANNED)

            self._render_all()
        except Exception as e:
            self._fail(e)
            raise

        written = self.run.written[0]
        logger.info("Added command '%s' at %s", self.project.command_name, written)
        return written

    # ── Steps ───────────────────────────────────────────────────

    def _ensure_directories(self) -> None:
        for directory in (self.project.root_path, self.project.cmd_path):
            if not directory.is_dir():
                logger.debug("Creating %s", directory)
                directory.mkdir(parents=True, exist_ok=True)
        self.run.advance(GeneratorState.DIRECTORY_ENSURED)

    def _render_all(self) -> None:
        for planned in self.run.planned:
            path = render_outcome(planned)
            if path is not None:
                self.run.written.append(path)
        self.run.advance(GeneratorState.RENDERED)
        self.run.advance(GeneratorState.DONE)

    def _fail(self, error: Exception) -> None:
        self.run.error = str(error)
        self.run.advance(GeneratorState.FAILED)
        logger.debug("Generation failed in %s", self.run.history[-2].value, exc_info=True)
