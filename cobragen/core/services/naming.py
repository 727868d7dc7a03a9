"""
Command-name normalization.

``serve-http`` and ``serve_http`` both become ``serveHttp``: the dash or
underscore is dropped and the character after it is upper-cased.
"""

from __future__ import annotations

from cobragen.core.errors import IdentifierInvalidError

_ELISION = frozenset("-_")

# Normalized name that would produce ``cmd/root.go`` / ``rootCmd``.
RESERVED_COMMAND = "root"


def normalize_command_name(source: str) -> str:
    """Drop ``-``/``_`` and upper-case the character that follows.

    A run of elision characters counts once and trailing ones are
    dropped. Only ASCII letters are upper-cased; anything else passes
    through unchanged. Names without elision characters, and names
    made only of them, are returned as given.

    >>> normalize_command_name("cmd______Name")
    'cmdName'
    >>> normalize_command_name("-name")
    'Name'
    """
    out: list[str] = []
    capitalize = False

    for ch in source:
        if ch in _ELISION:
            capitalize = True
            continue
        if capitalize and ch.isascii():
            out.append(ch.upper())
        else:
            out.append(ch)
        capitalize = False

    if not out:
        return source
    return "".join(out)


def validate_command_name(name: str) -> None:
    """Raise ``IdentifierInvalidError`` unless ``name`` is usable as a command."""
    if not name:
        raise IdentifierInvalidError(name, "name is empty")
    if not name.isidentifier():
        raise IdentifierInvalidError(name, "not a valid Go identifier")
    if name == RESERVED_COMMAND:
        raise IdentifierInvalidError(name, "collides with the root command")
