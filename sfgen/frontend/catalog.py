"""Symbol catalog loading: name_availability.plist and the .strings tables."""

from __future__ import annotations

import plistlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from xml.parsers.expat import ExpatError

DEFAULT_RESOURCES = Path(
    "/System/Library/PrivateFrameworks/SFSymbols.framework/Versions/A/Resources/CoreGlyphs.bundle/Contents/Resources"
)

NAME_AVAILABILITY_FILE = "name_availability.plist"
NAME_ALIASES_FILE = "name_aliases.strings"
NOFILL_TO_FILL_FILE = "nofill_to_fill.strings"
SEMANTIC_TO_DESCRIPTIVE_FILE = "semantic_to_descriptive_name.strings"
SYMBOL_RESTRICTIONS_FILE = "symbol_restrictions.strings"


class CatalogError(Exception):
    """Catalog resource missing or malformed."""

    def __init__(self, msg: str, path: str = ""):
        self.msg: str = msg
        self.path: str = path
        super().__init__(msg)

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.msg}"
        return self.msg


class MissingAvailabilityError(CatalogError):
    """A symbol references an availability key with no release mapping."""

    def __init__(self, symbol_name: str, key: str):
        self.symbol_name: str = symbol_name
        self.key: str = key
        super().__init__(f"symbol '{symbol_name}' references unknown availability key '{key}'")


@dataclass(frozen=True)
class YearMapping:
    """Minimum OS versions for one release year. Versions are free-form."""

    ios: str
    macos: str
    tvos: str
    watchos: str
    visionos: str


PLIST_PLATFORM_KEYS: dict[str, str] = {
    "iOS": "ios",
    "macOS": "macos",
    "tvOS": "tvos",
    "watchOS": "watchos",
    "visionOS": "visionos",
}


@dataclass(frozen=True)
class Catalog:
    """Everything generation reads, loaded once per run.

    symbols maps symbol name -> availability key (a release year such as
    "2019"); year_to_release maps that key to per-platform versions.
    nofill_to_fill and semantic_to_descriptive are loaded for completeness;
    only the semantic table feeds an optional output.
    """

    symbols: dict[str, str]
    year_to_release: dict[str, YearMapping]
    name_aliases: dict[str, str] = field(default_factory=dict)
    nofill_to_fill: dict[str, str] = field(default_factory=dict)
    semantic_to_descriptive: dict[str, str] = field(default_factory=dict)
    symbol_restrictions: dict[str, str] = field(default_factory=dict)


# --- .strings text format ---

_STRINGS_TOKEN = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<block>/\*.*?\*/)
  | (?P<line>//[^\n]*)
  | (?P<quoted>"(?:[^"\\]|\\.)*")
  | (?P<word>[A-Za-z0-9_$+/:.\-]+)
  | (?P<punct>[=;{}])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}


def _unescape(body: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(body):
        c = body[i]
        if c != "\\" or i + 1 >= len(body):
            out.append(c)
            i += 1
            continue
        nxt = body[i + 1]
        if nxt in ("U", "u") and re.fullmatch(r"[0-9A-Fa-f]{4}", body[i + 2 : i + 6]):
            out.append(chr(int(body[i + 2 : i + 6], 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
    return "".join(out)


def parse_strings_text(text: str, path: str = "") -> dict[str, str]:
    """Parse the old-style `"key" = "value";` .strings format, braced or bare."""
    tokens: list[tuple[str, str]] = []
    pos = 0
    while pos < len(text):
        m = _STRINGS_TOKEN.match(text, pos)
        if m is None:
            line = text.count("\n", 0, pos) + 1
            raise CatalogError(f"unexpected character {text[pos]!r} on line {line}", path)
        pos = m.end()
        kind = m.lastgroup
        if kind in ("ws", "block", "line"):
            continue
        if kind == "quoted":
            tokens.append(("str", _unescape(m.group()[1:-1])))
        elif kind == "word":
            tokens.append(("str", m.group()))
        else:
            tokens.append(("punct", m.group()))
    # the whole table may be wrapped in a `{ ... }` dictionary
    if tokens and tokens[0] == ("punct", "{"):
        if tokens[-1] != ("punct", "}"):
            raise CatalogError("unterminated dictionary", path)
        tokens = tokens[1:-1]
    result: dict[str, str] = {}
    i = 0
    while i < len(tokens):
        kind, key = tokens[i]
        if kind != "str":
            raise CatalogError(f"expected key, got {key!r}", path)
        rest = tokens[i + 1 : i + 4]
        if len(rest) == 3 and rest[0] == ("punct", "=") and rest[1][0] == "str" and rest[2] == ("punct", ";"):
            result[key] = rest[1][1]
            i += 4
        elif rest[:1] == [("punct", ";")]:
            # `"key";` is shorthand for `"key" = "key";`
            result[key] = key
            i += 2
        else:
            raise CatalogError(f"malformed entry for key {key!r}", path)
    return result


# --- Loading ---


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise CatalogError(f"cannot read file ({e.strerror})", str(path)) from e


def read_strings_file(path: Path) -> dict[str, str]:
    """Load a name-keyed string table from a plist or .strings file."""
    raw = _read_bytes(path)
    try:
        data = plistlib.loads(raw)
    except ExpatError as e:
        raise CatalogError(f"malformed property list ({e})", str(path)) from e
    except (plistlib.InvalidFileException, ValueError, TypeError):
        try:
            text = raw.decode("utf-16") if raw.startswith((b"\xff\xfe", b"\xfe\xff")) else raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CatalogError("invalid text encoding", str(path)) from e
        return parse_strings_text(text, str(path))
    if not isinstance(data, dict):
        raise CatalogError("expected a dictionary of strings", str(path))
    for key, value in data.items():
        if not isinstance(value, str):
            raise CatalogError(f"value for {key!r} is not a string", str(path))
    return dict(data)


def _year_mapping(key: str, entry: object, path: str) -> YearMapping:
    if not isinstance(entry, dict):
        raise CatalogError(f"year_to_release entry {key!r} is not a dictionary", path)
    versions: dict[str, str] = {}
    for plist_key, attr in PLIST_PLATFORM_KEYS.items():
        value = entry.get(plist_key)
        if not isinstance(value, str):
            raise CatalogError(f"year_to_release entry {key!r} is missing {plist_key}", path)
        versions[attr] = value
    return YearMapping(**versions)


def read_name_availability(path: Path) -> tuple[dict[str, str], dict[str, YearMapping]]:
    """Load the symbols and year_to_release tables."""
    raw = _read_bytes(path)
    try:
        data = plistlib.loads(raw)
    except (plistlib.InvalidFileException, ExpatError, ValueError, TypeError) as e:
        raise CatalogError(f"malformed property list ({e})", str(path)) from e
    if not isinstance(data, dict):
        raise CatalogError("expected a dictionary at top level", str(path))
    symbols = data.get("symbols")
    releases = data.get("year_to_release")
    if not isinstance(symbols, dict):
        raise CatalogError("missing 'symbols' dictionary", str(path))
    if not isinstance(releases, dict):
        raise CatalogError("missing 'year_to_release' dictionary", str(path))
    for name, key in symbols.items():
        if not isinstance(key, str):
            raise CatalogError(f"availability key for {name!r} is not a string", str(path))
    year_to_release = {key: _year_mapping(key, entry, str(path)) for key, entry in releases.items()}
    return dict(symbols), year_to_release


def load_catalog(resources: Path = DEFAULT_RESOURCES) -> Catalog:
    """Load the full catalog from a CoreGlyphs-style resource directory."""
    if not resources.is_dir():
        raise CatalogError("resource directory not found", str(resources))
    symbols, year_to_release = read_name_availability(resources / NAME_AVAILABILITY_FILE)
    return Catalog(
        symbols=symbols,
        year_to_release=year_to_release,
        name_aliases=read_strings_file(resources / NAME_ALIASES_FILE),
        nofill_to_fill=read_strings_file(resources / NOFILL_TO_FILL_FILE),
        semantic_to_descriptive=read_strings_file(resources / SEMANTIC_TO_DESCRIPTIVE_FILE),
        symbol_restrictions=read_strings_file(resources / SYMBOL_RESTRICTIONS_FILE),
    )
