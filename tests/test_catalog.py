"""Catalog loading tests: property lists, .strings text, error reporting."""

import plistlib
from pathlib import Path

import pytest

from conftest import NAME_ALIASES, SEMANTIC_TO_DESCRIPTIVE, SYMBOL_RESTRICTIONS, SYMBOLS, write_resources

from sfgen.frontend.catalog import (
    CatalogError,
    YearMapping,
    load_catalog,
    parse_strings_text,
    read_name_availability,
    read_strings_file,
)


# ============================================================
# .strings TEXT FORMAT
# ============================================================


def test_strings_basic_entries():
    text = '"a" = "b";\n"c.d" = "e.f";\n'
    assert parse_strings_text(text) == {"a": "b", "c.d": "e.f"}


def test_strings_comments_are_skipped():
    text = '/* block\n comment */\n"a" = "b"; // trailing\n// line\n"c" = "d";'
    assert parse_strings_text(text) == {"a": "b", "c": "d"}


def test_strings_escapes():
    text = r'"quote" = "say \"hi\"";' + "\n" + r'"tab" = "a\tb";' + "\n" + r'"uni" = "\U00e9";'
    assert parse_strings_text(text) == {"quote": 'say "hi"', "tab": "a\tb", "uni": "é"}


def test_strings_unquoted_words():
    assert parse_strings_text("key = value;") == {"key": "value"}


def test_strings_key_shorthand():
    assert parse_strings_text('"only";') == {"only": "only"}


def test_strings_empty():
    assert parse_strings_text("") == {}
    assert parse_strings_text("/* nothing */\n") == {}


def test_strings_missing_semicolon():
    with pytest.raises(CatalogError) as exc:
        parse_strings_text('"a" = "b"', "x.strings")
    assert "malformed entry" in str(exc.value)
    assert str(exc.value).startswith("x.strings: ")


def test_strings_unexpected_character_reports_line():
    with pytest.raises(CatalogError) as exc:
        parse_strings_text('"a" = "b";\n@', "x.strings")
    assert "line 2" in exc.value.msg


def test_strings_braced_dictionary():
    text = '{\n  "a" = "b";\n  c.d = "e";\n}\n'
    assert parse_strings_text(text) == {"a": "b", "c.d": "e"}
    assert parse_strings_text("/* empty */ { }") == {}


def test_strings_unterminated_dictionary():
    with pytest.raises(CatalogError) as exc:
        parse_strings_text('{ "a" = "b";', "x.strings")
    assert exc.value.msg == "unterminated dictionary"


def test_strings_stray_brace_is_malformed():
    with pytest.raises(CatalogError):
        parse_strings_text('"a" = "b"; }')


def test_strings_key_must_be_string():
    with pytest.raises(CatalogError):
        parse_strings_text("= ;")


# ============================================================
# FILES
# ============================================================


def test_read_strings_text_file(tmp_path: Path):
    path = tmp_path / "t.strings"
    path.write_text('"a" = "b";\n', encoding="utf-8")
    assert read_strings_file(path) == {"a": "b"}


def test_read_strings_braced_text_file(tmp_path: Path):
    path = tmp_path / "t.strings"
    path.write_text('{\n    "a" = "b";\n}\n', encoding="utf-8")
    assert read_strings_file(path) == {"a": "b"}


def test_read_strings_utf16_file(tmp_path: Path):
    path = tmp_path / "t.strings"
    path.write_bytes('"a" = "é";\n'.encode("utf-16"))
    assert read_strings_file(path) == {"a": "é"}


def test_read_strings_xml_plist(tmp_path: Path):
    path = tmp_path / "t.strings"
    path.write_bytes(plistlib.dumps({"a": "b"}))
    assert read_strings_file(path) == {"a": "b"}


def test_read_strings_binary_plist(tmp_path: Path):
    path = tmp_path / "t.strings"
    path.write_bytes(plistlib.dumps({"a": "b"}, fmt=plistlib.FMT_BINARY))
    assert read_strings_file(path) == {"a": "b"}


def test_read_strings_rejects_non_string_values(tmp_path: Path):
    path = tmp_path / "t.strings"
    path.write_bytes(plistlib.dumps({"a": 1}))
    with pytest.raises(CatalogError):
        read_strings_file(path)


def test_read_strings_missing_file(tmp_path: Path):
    with pytest.raises(CatalogError) as exc:
        read_strings_file(tmp_path / "absent.strings")
    assert "absent.strings" in str(exc.value)


def test_read_name_availability(tmp_path: Path):
    path = tmp_path / "name_availability.plist"
    data = {
        "symbols": {"a": "2019"},
        "year_to_release": {
            "2019": {"iOS": "13.0", "macOS": "10.15", "tvOS": "13.0", "watchOS": "6.0", "visionOS": "1.0"}
        },
    }
    path.write_bytes(plistlib.dumps(data))
    symbols, releases = read_name_availability(path)
    assert symbols == {"a": "2019"}
    assert releases["2019"] == YearMapping("13.0", "10.15", "13.0", "6.0", "1.0")


def test_read_name_availability_missing_platform(tmp_path: Path):
    path = tmp_path / "name_availability.plist"
    data = {"symbols": {}, "year_to_release": {"2019": {"iOS": "13.0"}}}
    path.write_bytes(plistlib.dumps(data))
    with pytest.raises(CatalogError) as exc:
        read_name_availability(path)
    assert "macOS" in str(exc.value)


def test_read_name_availability_missing_tables(tmp_path: Path):
    path = tmp_path / "name_availability.plist"
    path.write_bytes(plistlib.dumps({"symbols": {}}))
    with pytest.raises(CatalogError) as exc:
        read_name_availability(path)
    assert "year_to_release" in str(exc.value)


def test_read_name_availability_malformed_xml(tmp_path: Path):
    path = tmp_path / "name_availability.plist"
    path.write_bytes(b"<?xml version='1.0'?><plist><dict><key>")
    with pytest.raises(CatalogError):
        read_name_availability(path)


# ============================================================
# FULL CATALOG
# ============================================================


def test_load_catalog(tmp_path: Path):
    catalog = load_catalog(write_resources(tmp_path))
    assert catalog.symbols == SYMBOLS
    assert catalog.name_aliases == NAME_ALIASES
    assert catalog.symbol_restrictions == SYMBOL_RESTRICTIONS
    assert catalog.semantic_to_descriptive == SEMANTIC_TO_DESCRIPTIVE
    assert catalog.nofill_to_fill == {"message": "message.fill"}
    assert set(catalog.year_to_release) == {"2019", "2020", "2021"}


def test_load_catalog_missing_directory(tmp_path: Path):
    with pytest.raises(CatalogError) as exc:
        load_catalog(tmp_path / "nope")
    assert "resource directory not found" in str(exc.value)


def test_load_catalog_missing_table(tmp_path: Path):
    write_resources(tmp_path)
    (tmp_path / "symbol_restrictions.strings").unlink()
    with pytest.raises(CatalogError) as exc:
        load_catalog(tmp_path)
    assert "symbol_restrictions.strings" in str(exc.value)
