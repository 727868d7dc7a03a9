"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from cobragen.core.models.project import Project
from cobragen.core.services.generators.project import ProjectGenerator
from cobragen.core.services.licenses import LicenseResolver, default_catalog
from cobragen.core.services.templates import TemplateStore

AUTHOR = "Jane Doe"
YEAR = "2024"
MODULE = "example.com/demo"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch):
    """Keep the user's config, home dir and log settings out of tests."""
    for var in ("COBRAGEN_CONFIG", "COBRAGEN_LOG_LEVEL", "COBRAGEN_LOG_FILE", "COBRAGEN_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "_home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))

    root = logging.getLogger()
    level = root.level
    yield
    # Drop handlers installed by setup_logging (pytest's own are subclasses)
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def resolver() -> LicenseResolver:
    return LicenseResolver(default_catalog())


@pytest.fixture
def empty_store(tmp_path: Path) -> TemplateStore:
    """A template store with no templates at all."""
    root = tmp_path / "_templates"
    root.mkdir()
    return TemplateStore(root)


@pytest.fixture
def make_project(tmp_path: Path, resolver: LicenseResolver):
    """Generate a project and return its root.

    ``make_project("mit")`` writes ``<tmp>/demo`` with the given license.
    """

    def _make(license_key: str = "mit", name: str = "demo") -> Path:
        project = Project(root_path=tmp_path / name, module_name=MODULE)
        ProjectGenerator(
            project, resolver, license_key=license_key, author=AUTHOR, year=YEAR,
        ).create_project()
        return project.root_path

    return _make
