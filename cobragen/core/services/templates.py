"""
Template store — read-only access to the bundled ``*.tmpl`` resources.

Templates are addressed by logical name (``main``, ``root_none``,
``license_mit``, ``header_apache_2``, ...). The default store reads
package data from ``cobragen/templates``; tests may point a store at
any directory.
"""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from cobragen.core.errors import TemplateMissingError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"

# Code templates, with and without license header.
MAIN = "main"
ROOT = "root"
ADD_COMMAND = "add_command"
NO_HEADER_SUFFIX = "_none"


def license_template(code: str) -> str:
    return f"license_{code}"


def header_template(code: str) -> str:
    return f"header_{code}"


def variant(name: str, with_header: bool) -> str:
    """``main`` → ``main`` or ``main_none``."""
    return name if with_header else f"{name}{NO_HEADER_SUFFIX}"


class TemplateStore:
    """Loads template text by logical name."""

    def __init__(self, root: Traversable | Path | None = None) -> None:
        self._root = root if root is not None else resources.files("cobragen") / "templates"

    def load(self, name: str, license_key: str | None = None) -> str:
        """Return the text of template ``name``.

        Raises:
            TemplateMissingError: No such template.
        """
        resource = self._root / f"{name}{TEMPLATE_SUFFIX}"
        if not resource.is_file():
            raise TemplateMissingError(name, license_key)
        logger.debug("Loading template %s", name)
        return resource.read_text(encoding="utf-8")

    def exists(self, name: str) -> bool:
        return (self._root / f"{name}{TEMPLATE_SUFFIX}").is_file()

    def names(self) -> list[str]:
        """All template names in the store, sorted."""
        return sorted(
            entry.name[: -len(TEMPLATE_SUFFIX)]
            for entry in self._root.iterdir()
            if entry.is_file() and entry.name.endswith(TEMPLATE_SUFFIX)
        )
