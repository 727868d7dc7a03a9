"""
Tests for the license catalog, resolver and reverse lookup.
"""

import re
from datetime import date
from pathlib import Path

import pytest

from cobragen.core.errors import TemplateMissingError
from cobragen.core.models.license import LicenseDefinition
from cobragen.core.models.template import LicenseData
from cobragen.core.services.generators.renderer import render_text
from cobragen.core.services.licenses import (
    LicenseCatalog,
    LicenseResolver,
    content_hash,
    copyright_line,
    default_catalog,
    extract_copyright,
    find_copyright_line,
    reverse_resolve,
    split_copyright_line,
)
from cobragen.core.services.templates import TemplateStore

REAL_KEYS = ["apache2", "mit", "bsd-3", "bsd-2", "gpl-2", "gpl-3", "lgpl", "agpl"]


def _rendered_body(resolver: LicenseResolver, key: str, line: str) -> bytes:
    definition = resolver.catalog.get(key)
    name = f"license_{definition.code}"
    data = LicenseData(copyright_line=line, display_name=definition.display_name)
    return render_text(name, resolver.templates.load(name), data).encode("utf-8")


# ═══════════════════════════════════════════════════════════════════
#  Catalog
# ═══════════════════════════════════════════════════════════════════


class TestCatalog:
    def test_nine_entries(self):
        catalog = default_catalog()
        assert len(catalog) == 9
        assert catalog.keys() == REAL_KEYS + ["none"]

    def test_none_entry(self):
        catalog = default_catalog()
        assert catalog.none.key == "none"
        assert catalog.none.is_none
        assert "none" in catalog

    def test_requires_none(self):
        with pytest.raises(ValueError, match="none"):
            LicenseCatalog([LicenseDefinition(key="mit", code="mit", display_name="MIT")])

    def test_get_is_case_sensitive(self):
        catalog = default_catalog()
        assert catalog.get("mit").display_name == "MIT License"
        assert catalog.get("MIT") is None
        assert "Apache-2.0" not in catalog

    def test_codes_are_unique(self):
        codes = [d.code for d in default_catalog()]
        assert len(codes) == len(set(codes))

    @pytest.mark.parametrize(
        ("name", "key"),
        [("Apache-2.0", "apache2"), ("GPL", "gpl-3"), ("gplv2", "gpl-2"), ("newbsd", "bsd-3"),
         ("FreeBSD", "bsd-2"), ("MIT", "mit"), ("false", "none")],
    )
    def test_find_by_alias(self, name, key):
        assert default_catalog().find_by_alias(name).key == key

    def test_find_by_alias_unknown(self):
        assert default_catalog().find_by_alias("wtfpl") is None


# ═══════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════


class TestHelpers:
    def test_copyright_line(self):
        assert copyright_line("Jane Doe", "2024") == "Copyright © 2024 Jane Doe"

    def test_copyright_line_defaults_to_current_year(self):
        assert copyright_line("Jane") == f"Copyright © {date.today().year} Jane"

    def test_content_hash_ignores_crlf(self):
        assert content_hash(b"a\r\nb\r\n") == content_hash(b"a\nb\n")

    def test_content_hash_is_upper_hex(self):
        digest = content_hash(b"x")
        assert re.fullmatch(r"[0-9A-F]{32}", digest)

    def test_extract_copyright(self):
        text = "The MIT License (MIT)\n\nCopyright © 2021 Jane Doe <jane@example.com>\n\nPermission..."
        assert extract_copyright(text) == ("2021", "Jane Doe <jane@example.com>")

    def test_extract_copyright_ascii_form_ignored(self):
        assert extract_copyright("Copyright (C) 2007 Free Software Foundation") is None

    def test_copyright_line_stays_on_its_line(self):
        text = "Copyright © 2024 \n\nPermission is hereby granted\n"
        assert find_copyright_line(text) == "Copyright © 2024 "
        assert extract_copyright(text) == ("2024", "")

    def test_copyright_line_crlf(self):
        assert find_copyright_line("x\r\nCopyright © 2024 Jane\r\nnext\r\n") == "Copyright © 2024 Jane"

    @pytest.mark.parametrize(
        ("author", "year"),
        [("Jane Doe", "2024"), ("", "2024"), ("Ada", "24"), ("Ada Lovelace", "MMXXIV")],
    )
    def test_split_inverts_copyright_line(self, author, year):
        assert split_copyright_line(copyright_line(author, year)) == (year, author)


# ═══════════════════════════════════════════════════════════════════
#  resolve
# ═══════════════════════════════════════════════════════════════════


class TestResolve:
    @pytest.mark.parametrize("key", REAL_KEYS)
    def test_every_real_license(self, resolver, key):
        record = resolver.resolve(key, "Jane Doe", "2024")
        assert record.key == key
        assert record.copyright_line == "Copyright © 2024 Jane Doe"
        assert record.header_text.strip()
        assert record.body_text.strip()
        assert record.content_hash == content_hash(record.body_text.encode("utf-8"))

    def test_none(self, resolver):
        record = resolver.resolve("none", "Jane Doe", "2024")
        assert record.is_none
        assert record.header_text == ""
        assert record.body_text == ""
        assert record.content_hash is None
        assert record.copyright_line == "Copyright © 2024 Jane Doe"

    def test_alias_is_not_a_key(self, resolver):
        assert resolver.resolve("MIT", "Jane").is_none

    def test_unknown_key_loads_nothing(self, empty_store):
        resolver = LicenseResolver(default_catalog(), empty_store)
        record = resolver.resolve("no-such-license", "Jane", "2024")
        assert record.is_none
        assert record.copyright_line == "Copyright © 2024 Jane"

    def test_missing_header(self, empty_store):
        resolver = LicenseResolver(default_catalog(), empty_store)
        with pytest.raises(TemplateMissingError) as exc:
            resolver.resolve("mit", "Jane")
        assert exc.value.name == "header_mit"
        assert exc.value.license_key == "mit"

    def test_missing_body(self, tmp_path: Path):
        root = tmp_path / "partial"
        root.mkdir()
        (root / "header_mit.tmpl").write_text("MIT header\n")
        resolver = LicenseResolver(default_catalog(), TemplateStore(root))
        with pytest.raises(TemplateMissingError, match="license_mit"):
            resolver.resolve("mit", "Jane")

    def test_new_record_per_call(self, resolver):
        first = resolver.resolve("mit", "Jane", "2024")
        second = resolver.resolve("mit", "Jane", "2024")
        assert first == second
        assert first is not second


# ═══════════════════════════════════════════════════════════════════
#  reverse_resolve
# ═══════════════════════════════════════════════════════════════════


class TestReverseResolve:
    def test_exact_match(self):
        bodies = {"mit": b"MIT body\n", "bsd-2": b"BSD body\n"}
        assert reverse_resolve(b"BSD body\n", bodies) == ("bsd-2", True)

    def test_crlf_on_either_side(self):
        assert reverse_resolve(b"line one\r\nline two\r\n", {"mit": b"line one\nline two\n"}) == ("mit", True)
        assert reverse_resolve(b"line one\nline two\n", {"mit": b"line one\r\nline two\r\n"}) == ("mit", True)

    def test_no_match(self):
        assert reverse_resolve(b"custom license\n", {"mit": b"MIT body\n"}) == (None, False)

    def test_whitespace_difference_is_no_match(self):
        assert reverse_resolve(b"MIT body \n", {"mit": b"MIT body\n"}) == (None, False)

    def test_first_match_wins(self):
        pairs = [("first", b"same\n"), ("second", b"same\n")]
        assert reverse_resolve(b"same\n", pairs) == ("first", True)

    @pytest.mark.parametrize("key", REAL_KEYS)
    def test_generated_bodies_round_trip(self, resolver, key):
        line = "Copyright © 2024 Jane Doe"
        body = _rendered_body(resolver, key, line)
        assert reverse_resolve(body, resolver.catalog_bodies(line)) == (key, True)


# ═══════════════════════════════════════════════════════════════════
#  identify
# ═══════════════════════════════════════════════════════════════════


class TestIdentify:
    def test_copyright_from_license(self, resolver):
        body = _rendered_body(resolver, "mit", "Copyright © 2019 Ada Lovelace")
        record, found = resolver.identify(body)
        assert found
        assert record.key == "mit"
        assert record.copyright_line == "Copyright © 2019 Ada Lovelace"

    def test_copyright_from_fallback(self, resolver):
        body = _rendered_body(resolver, "apache2", "unused")
        root_go = "/*\nCopyright © 2020 Grace Hopper\n\nLicensed under...\n*/\npackage cmd\n"
        record, found = resolver.identify(body, root_go)
        assert found
        assert record.key == "apache2"
        assert record.copyright_line == "Copyright © 2020 Grace Hopper"

    def test_crlf_license(self, resolver):
        body = _rendered_body(resolver, "bsd-3", "Copyright © 2024 Jane Doe")
        _, found = resolver.identify(body.replace(b"\n", b"\r\n"))
        assert found

    def test_unrecognized(self, resolver):
        record, found = resolver.identify(b"All rights reserved.\n")
        assert not found
        assert record.is_none

    def test_edited_license(self, resolver):
        body = _rendered_body(resolver, "mit", "Copyright © 2024 Jane Doe")
        record, found = resolver.identify(body + b"\nExtra clause.\n")
        assert not found
        assert record.is_none

    @pytest.mark.parametrize("key", ["mit", "bsd-2", "bsd-3"])
    def test_empty_author(self, resolver, key):
        line = copyright_line("", "2024")
        record, found = resolver.identify(_rendered_body(resolver, key, line))
        assert found
        assert record.key == key
        assert record.copyright_line == line

    @pytest.mark.parametrize("key", ["mit", "bsd-3"])
    def test_short_year(self, resolver, key):
        line = copyright_line("Ada", "24")
        record, found = resolver.identify(_rendered_body(resolver, key, line))
        assert found
        assert record.key == key
        assert record.copyright_line == "Copyright © 24 Ada"

    def test_empty_author_from_fallback(self, resolver):
        body = _rendered_body(resolver, "apache2", "unused")
        root_go = "/*\nCopyright © 2024 \n\nLicensed under...\n*/\npackage cmd\n"
        record, found = resolver.identify(body, root_go)
        assert found
        assert record.copyright_line == "Copyright © 2024 "
