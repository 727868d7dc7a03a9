"""
Template renderer — turn one ``ContentDescriptor`` into a file.

Pure templating: Jinja2 substitution and conditionals over the
descriptor's bound data, no business logic. The renderer does not
create directories; the project generator guarantees they exist.

The target file is opened (and truncated) before the template is
compiled, so a template failure leaves an empty or partial file
behind. Callers wanting a clean tree must remove it themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from cobragen.core.errors import TemplateRenderError
from cobragen.core.models.template import (
    ContentDescriptor,
    LicenseData,
    MainData,
    Omitted,
    PlannedContent,
    RootData,
    SubCommandData,
)

logger = logging.getLogger(__name__)

# Output is Go source and plain text: no autoescaping, keep final newline.
_ENV = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


def render_text(name: str, source: str, data: object, target: Path | None = None) -> str:
    """Render ``source`` with the namespace of ``data`` and return the text.

    Raises:
        TemplateRenderError: Template syntax error or undefined variable.
    """
    context = _context_for(data)
    try:
        return _ENV.from_string(source).render(**context)
    except TemplateError as e:
        raise TemplateRenderError(name, target or Path(name), e) from e


def render(descriptor: ContentDescriptor) -> Path:
    """Write ``descriptor`` to its target path.

    Returns:
        The path written.

    Raises:
        TemplateRenderError: Template failed to parse or execute.
        OSError: Target could not be opened or written.
    """
    target = descriptor.target_path
    with target.open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(
            render_text(descriptor.name, descriptor.template_source, descriptor.bound_data, target)
        )
    logger.info("Wrote %s", target)
    return target


def render_outcome(planned: PlannedContent) -> Path | None:
    """Render a planner outcome; ``Omitted`` never touches the filesystem."""
    if isinstance(planned, Omitted):
        logger.debug("Skipping %s: %s", planned.name, planned.reason)
        return None
    return render(planned.descriptor)


def _context_for(data: object) -> dict:
    match data:
        case MainData() | RootData() | LicenseData() | SubCommandData():
            return data.context()
    raise TypeError(f"Unsupported bound data: {type(data).__name__}")
