"""
License catalog and resolver.

The catalog is a fixed table of nine licenses (eight real ones plus
``none``). It is built once, never mutated, and handed to the resolver.

The resolver turns a license key into a ``LicenseRecord`` (forward) and
recovers the key from an existing LICENSE file (reverse). Reverse
lookup is an exact comparison after CRLF→LF normalization, never a
fuzzy match: the goal is to recognise files this tool generated.
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from datetime import date

from cobragen.core.models.license import NONE_KEY, LicenseDefinition, LicenseRecord
from cobragen.core.models.template import LicenseData
from cobragen.core.services.generators.renderer import render_text
from cobragen.core.services.templates import TemplateStore, header_template, license_template

logger = logging.getLogger(__name__)

COPYRIGHT_PREFIX = "Copyright ©"

# Whole line, taken as written; never spans into the next line
_COPYRIGHT_LINE_RE = re.compile(r"^[ \t]*(Copyright ©[^\r\n]*)", re.MULTILINE)


# ── Catalog ─────────────────────────────────────────────────────


_DEFINITIONS: tuple[LicenseDefinition, ...] = (
    LicenseDefinition(
        key="apache2",
        code="apache_2",
        display_name="Apache 2.0",
        aliases=("Apache-2.0", "apache", "apache20", "apache 2.0", "apache2.0", "apache-2.0"),
    ),
    LicenseDefinition(
        key="mit",
        code="mit",
        display_name="MIT License",
        aliases=("MIT", "mit"),
    ),
    LicenseDefinition(
        key="bsd-3",
        code="bsd_clause_3",
        display_name="NewBSD",
        aliases=("BSD-3-Clause", "bsd", "newbsd", "3 clause bsd", "3-clause bsd"),
    ),
    LicenseDefinition(
        key="bsd-2",
        code="bsd_clause_2",
        display_name="Simplified BSD License",
        aliases=(
            "BSD-2-Clause", "freebsd", "simpbsd", "simple bsd",
            "2-clause bsd", "2 clause bsd", "simplified bsd license",
        ),
    ),
    LicenseDefinition(
        key="gpl-2",
        code="gpl_2",
        display_name="GNU General Public License 2.0",
        aliases=("GPL-2.0", "gpl2", "gnu gpl2", "gplv2"),
    ),
    LicenseDefinition(
        key="gpl-3",
        code="gpl_3",
        display_name="GNU General Public License 3.0",
        aliases=("GPL-3.0", "gpl3", "gplv3", "gpl", "gnu gpl3", "gnu gpl"),
    ),
    LicenseDefinition(
        key="lgpl",
        code="lgpl",
        display_name="GNU Lesser General Public License",
        aliases=("LGPL-3.0", "lgpl", "lesser gpl", "gnu lgpl"),
    ),
    LicenseDefinition(
        key="agpl",
        code="agpl",
        display_name="GNU Affero General Public License",
        aliases=("AGPL-3.0", "agpl", "affero gpl", "gnu agpl"),
    ),
    LicenseDefinition(
        key=NONE_KEY,
        code=NONE_KEY,
        display_name="None",
        aliases=("none", "false"),
    ),
)


class LicenseCatalog:
    """Read-only table of known licenses, keyed by ``key``."""

    def __init__(self, definitions: Iterable[LicenseDefinition] = _DEFINITIONS) -> None:
        entries = {d.key: d for d in definitions}
        if NONE_KEY not in entries:
            raise ValueError("license catalog must contain a 'none' entry")
        self._entries: Mapping[str, LicenseDefinition] = entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LicenseDefinition]:
        return iter(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        return list(self._entries)

    def get(self, key: str) -> LicenseDefinition | None:
        """Exact, case-sensitive lookup on the catalog key."""
        return self._entries.get(key)

    @property
    def none(self) -> LicenseDefinition:
        return self._entries[NONE_KEY]

    def find_by_alias(self, name: str) -> LicenseDefinition | None:
        """Case-insensitive alias lookup, for "did you mean" hints only."""
        wanted = name.strip().lower()
        for definition in self._entries.values():
            if wanted == definition.key.lower():
                return definition
            if any(wanted == alias.lower() for alias in definition.aliases):
                return definition
        return None


def default_catalog() -> LicenseCatalog:
    return LicenseCatalog()


# ── Helpers ─────────────────────────────────────────────────────


def ensure_lf(content: bytes) -> bytes:
    return content.replace(b"\r\n", b"\n")


def content_hash(content: bytes) -> str:
    """MD5 hex digest of ``content`` with LF line endings."""
    return hashlib.md5(ensure_lf(content)).hexdigest().upper()


def copyright_line(author: str, year: str | None = None) -> str:
    """``Copyright © <year> <author>``; year defaults to this year."""
    return f"{COPYRIGHT_PREFIX} {year or date.today().year} {author}"


def find_copyright_line(text: str) -> str | None:
    """The first ``Copyright © ...`` line, byte-for-byte (trailing blanks kept)."""
    match = _COPYRIGHT_LINE_RE.search(text)
    if match is None:
        return None
    return match.group(1)


def split_copyright_line(line: str) -> tuple[str, str]:
    """Inverse of ``copyright_line``: ``(year, author)``, either may be empty."""
    rest = line[len(COPYRIGHT_PREFIX):] if line.startswith(COPYRIGHT_PREFIX) else line
    if rest.startswith(" "):
        rest = rest[1:]
    year, _, author = rest.partition(" ")
    return year, author


def extract_copyright(text: str) -> tuple[str, str] | None:
    """Find the first copyright line and split it.

    Returns:
        ``(year, author)`` or None.
    """
    line = find_copyright_line(text)
    if line is None:
        return None
    return split_copyright_line(line)


def reverse_resolve(
    existing: bytes,
    catalog_bodies: Mapping[str, bytes] | Iterable[tuple[str, bytes]],
) -> tuple[str | None, bool]:
    """Match an existing LICENSE against known bodies.

    Both sides are compared with LF line endings; the first exact match
    wins. No match means the project has an unrecognised (or no)
    license, which is not an error.

    Returns:
        ``(key, True)`` on a match, ``(None, False)`` otherwise.
    """
    wanted = content_hash(existing)
    items = catalog_bodies.items() if isinstance(catalog_bodies, Mapping) else catalog_bodies
    for key, body in items:
        if content_hash(body) == wanted:
            return key, True
    return None, False


# ── Resolver ────────────────────────────────────────────────────


class LicenseResolver:
    """Builds ``LicenseRecord`` values from the injected catalog."""

    def __init__(self, catalog: LicenseCatalog, templates: TemplateStore | None = None) -> None:
        self.catalog = catalog
        self.templates = templates or TemplateStore()

    def resolve(self, key: str, author: str, year: str | None = None) -> LicenseRecord:
        """Resolve ``key`` to a record.

        Unknown keys fall back to ``none`` silently. For any other
        license both header and body must load.

        Raises:
            TemplateMissingError: Header or body resource is missing.
        """
        definition = self.catalog.get(key)
        if definition is None:
            logger.debug("Unknown license key %r, using '%s'", key, NONE_KEY)
            definition = self.catalog.none

        line = copyright_line(author, year)
        if definition.is_none:
            return LicenseRecord(**definition.model_dump(), copyright_line=line)

        header = self.templates.load(header_template(definition.code), license_key=definition.key)
        body = self.templates.load(license_template(definition.code), license_key=definition.key)

        logger.info("Resolved license '%s' (%s)", definition.key, definition.display_name)
        return LicenseRecord(
            **definition.model_dump(),
            header_text=header,
            body_text=body,
            copyright_line=line,
            content_hash=content_hash(body.encode("utf-8")),
        )

    def catalog_bodies(self, line: str) -> Iterator[tuple[str, bytes]]:
        """Yield ``(key, rendered LICENSE bytes)`` for every real license.

        Bodies are rendered with ``line`` as the copyright line, so the
        output is byte-for-byte what ``init`` would have written.
        Licenses whose body template is missing are skipped.
        """
        for definition in self.catalog:
            if definition.is_none:
                continue
            name = license_template(definition.code)
            if not self.templates.exists(name):
                logger.debug("No body template for '%s', skipping", definition.key)
                continue
            data = LicenseData(copyright_line=line, display_name=definition.display_name)
            text = render_text(name, self.templates.load(name), data)
            yield definition.key, text.encode("utf-8")

    def identify(self, license_text: bytes, fallback_text: str = "") -> tuple[LicenseRecord, bool]:
        """Recover the license record of an existing project.

        The copyright line is taken verbatim from the LICENSE itself, else
        from ``fallback_text`` (usually the root command source), and the
        catalog bodies are rendered with it. The returned record carries
        that same line; year and author are split out of it.

        Returns:
            ``(record, found)``; an unrecognised license gives the
            ``none`` record and ``found=False``.
        """
        text = license_text.decode("utf-8", errors="replace")
        line = find_copyright_line(text) or find_copyright_line(fallback_text) or ""
        year, author = split_copyright_line(line)

        key, found = reverse_resolve(license_text, self.catalog_bodies(line))
        record = self.resolve(key or NONE_KEY, author, year or None)
        if line:
            record = record.model_copy(update={"copyright_line": line})
        return record, found
