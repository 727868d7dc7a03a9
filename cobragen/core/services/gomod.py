"""
Go module detection — derive the import path of a directory.

Reads the nearest ``go.mod`` at or above the directory and appends the
relative path, the same answer ``go list`` gives for a package dir.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"

_MODULE_RE = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)


def find_go_mod(start: Path) -> Path | None:
    """Nearest go.mod at or above ``start``."""
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / GO_MOD
        if candidate.is_file():
            return candidate
    return None


def read_module_path(go_mod: Path) -> str | None:
    """The ``module`` directive of a go.mod file, unquoted."""
    match = _MODULE_RE.search(go_mod.read_text(encoding="utf-8"))
    if match is None:
        return None
    return match.group(1).strip('"`')


def detect_module_name(target: Path) -> str | None:
    """Import path for ``target``, or None when no go.mod applies.

    ``target`` does not need to exist yet: a new sub-directory of a
    module gets the module path plus its relative path.
    """
    probe = target.resolve()
    while not probe.exists() and probe != probe.parent:
        probe = probe.parent

    go_mod = find_go_mod(probe)
    if go_mod is None:
        return None

    module = read_module_path(go_mod)
    if module is None:
        logger.warning("%s has no module directive", go_mod)
        return None

    relative = target.resolve().relative_to(go_mod.parent)
    if relative == Path("."):
        return module
    return str(PurePosixPath(module, *relative.parts))
