"""
License models — catalog entries and resolved license records.

A ``LicenseDefinition`` is a static row of the license catalog.
A ``LicenseRecord`` is what the resolver builds for one request:
the definition plus loaded header/body text and the copyright line.
Records are never cached; a new one is built per resolution.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

NONE_KEY = "none"


class LicenseDefinition(BaseModel):
    """One row of the license catalog."""

    model_config = ConfigDict(frozen=True)

    key: str                        # user-facing selector, e.g. "apache2"
    code: str                       # resource slug, e.g. "apache_2"
    display_name: str
    aliases: tuple[str, ...] = ()

    @property
    def is_none(self) -> bool:
        return self.key == NONE_KEY


class LicenseRecord(BaseModel):
    """A fully resolved license, ready to bind into templates.

    Attributes:
        header_text:    Notice prepended to generated source files.
        body_text:      Full license text (a template, may hold
                        ``{{ copyright_line }}``).
        copyright_line: ``Copyright © <year> <author>``.
        content_hash:   MD5 hex digest of ``body_text`` (LF line endings),
                        ``None`` for the ``none`` license.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    code: str
    display_name: str
    aliases: tuple[str, ...] = ()
    header_text: str = ""
    body_text: str = ""
    copyright_line: str = ""
    content_hash: str | None = None

    @property
    def is_none(self) -> bool:
        return self.key == NONE_KEY
