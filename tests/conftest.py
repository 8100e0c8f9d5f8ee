"""Pytest configuration for the sfgen test suite."""

import plistlib
from pathlib import Path

import pytest

from sfgen.frontend.catalog import Catalog, YearMapping

YEAR_TO_RELEASE: dict[str, YearMapping] = {
    "2019": YearMapping(ios="13.0", macos="10.15", tvos="13.0", watchos="6.0", visionos="1.0"),
    "2020": YearMapping(ios="14.0", macos="11.0", tvos="14.0", watchos="7.0", visionos="1.0"),
    "2021": YearMapping(ios="15.0", macos="12.0", tvos="15.0", watchos="8.0", visionos="1.0"),
}

SYMBOLS: dict[str, str] = {
    "message.circle": "2019",
    "c.square": "2019",
    "person.2.fill": "2019",
    "1.circle": "2019",
    "speaker.3": "2019",
    "speaker.wave.3": "2020",
    "facetime": "2020",
    "record.circle.fill": "2020",
    "record.circle.fill.ja": "2021",
    "arrow.left": "2019",
    "arrow.left.rtl": "2019",
    "repeat": "2019",
}

NAME_ALIASES: dict[str, str] = {"speaker.3": "speaker.wave.3"}

SYMBOL_RESTRICTIONS: dict[str, str] = {"facetime": "May only be used to refer to Apple's FaceTime app."}

SEMANTIC_TO_DESCRIPTIVE: dict[str, str] = {
    "chat.bubble": "message.circle",
    "record.button.ja": "record.circle.fill.ja",
}


def make_catalog(**overrides: object) -> Catalog:
    """A small catalog covering aliases, restrictions and localized variants."""
    fields: dict[str, object] = {
        "symbols": dict(SYMBOLS),
        "year_to_release": dict(YEAR_TO_RELEASE),
        "name_aliases": dict(NAME_ALIASES),
        "nofill_to_fill": {"message": "message.fill"},
        "semantic_to_descriptive": dict(SEMANTIC_TO_DESCRIPTIVE),
        "symbol_restrictions": dict(SYMBOL_RESTRICTIONS),
    }
    fields.update(overrides)
    return Catalog(**fields)  # type: ignore[arg-type]


def strings_text(table: dict[str, str]) -> str:
    """Render a table in the old-style .strings text format."""
    lines = ["/* generated for tests */"]
    for key, value in table.items():
        lines.append(f'"{key}" = "{value}";')
    return "\n".join(lines) + "\n"


def write_resources(directory: Path, symbols: dict[str, str] | None = None) -> Path:
    """Write a CoreGlyphs-style resource directory and return its path."""
    availability = {
        "symbols": dict(SYMBOLS if symbols is None else symbols),
        "year_to_release": {
            key: {
                "iOS": m.ios,
                "macOS": m.macos,
                "tvOS": m.tvos,
                "watchOS": m.watchos,
                "visionOS": m.visionos,
            }
            for key, m in YEAR_TO_RELEASE.items()
        },
    }
    with open(directory / "name_availability.plist", "wb") as f:
        plistlib.dump(availability, f)
    (directory / "name_aliases.strings").write_text(strings_text(NAME_ALIASES), encoding="utf-8")
    (directory / "nofill_to_fill.strings").write_text(strings_text({"message": "message.fill"}), encoding="utf-8")
    with open(directory / "semantic_to_descriptive_name.strings", "wb") as f:
        plistlib.dump(SEMANTIC_TO_DESCRIPTIVE, f)
    (directory / "symbol_restrictions.strings").write_text(strings_text(SYMBOL_RESTRICTIONS), encoding="utf-8")
    return directory


@pytest.fixture
def catalog() -> Catalog:
    return make_catalog()


@pytest.fixture
def resources(tmp_path: Path) -> Path:
    return write_resources(tmp_path)
