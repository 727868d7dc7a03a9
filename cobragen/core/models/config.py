"""
Generator configuration — defaults read from ``.cobra.yaml``.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

DEFAULT_AUTHOR = "NAME HERE <EMAIL ADDRESS>"
DEFAULT_LICENSE = "none"


class GeneratorConfig(BaseModel):
    """User defaults for every generated project.

    ``year`` left empty means "current calendar year".
    """

    author: str = DEFAULT_AUTHOR
    license: str = DEFAULT_LICENSE
    year: str = ""

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_str(cls, value: object) -> object:
        # YAML reads `year: 2024` as an int
        if isinstance(value, int):
            return str(value)
        return value


def is_valid_year(year: str) -> bool:
    """Four ASCII digits, the only year form a copyright line is written with."""
    return len(year) == 4 and year.isascii() and year.isdigit()
