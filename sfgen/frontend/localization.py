"""Localized symbol variants: detection and export options."""

from __future__ import annotations

import enum
from typing import Literal

# ISO 639-1 two-letter codes, plus the ISO 639-2/3 codes of catalog languages
# that have no two-letter code (Najdi Arabic, Cherokee, Filipino, Hawaiian,
# Manipuri, Santali, Cantonese).
ISO_LANGUAGE_CODES = frozenset(
    """
    aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce
    ch co cr cs cu cv cy da de dv dz ee el en eo es et eu fa ff fi fj fo fr
    fy ga gd gl gn gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik io is
    it iu ja jv ka kg ki kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln
    lo lt lu lv mg mh mi mk ml mn mr ms mt my na nb nd ne ng nl nn no nr nv
    ny oc oj om or os pa pi pl ps pt qu rm rn ro ru rw sa sc sd se sg si sk
    sl sm sn so sq sr ss st su sv sw ta te tg th ti tk tl tn to tr ts tt tw
    ty ug uk ur uz ve vi vo wa wo xh yi yo za zh zu
    ars chr fil haw mni sat yue
    """.split()
)

RIGHT_TO_LEFT_SUFFIX = ".rtl"


class LocalizationOption(enum.Flag):
    """Which localized variants to export. Unset variants are filtered out."""

    NONE = 0
    LANGUAGE_CODE = enum.auto()
    RIGHT_TO_LEFT = enum.auto()


LocalizationFlag = Literal["both", "language_code", "right_to_left"]


def transform(flag: LocalizationFlag | None) -> LocalizationOption:
    """Translate a command-line localization flag into export options."""
    if flag is None:
        return LocalizationOption.NONE
    if flag == "both":
        return LocalizationOption.LANGUAGE_CODE | LocalizationOption.RIGHT_TO_LEFT
    if flag == "language_code":
        return LocalizationOption.LANGUAGE_CODE
    if flag == "right_to_left":
        return LocalizationOption.RIGHT_TO_LEFT
    raise ValueError(f"unknown localization flag: {flag!r}")


def has_language_code(symbol_name: str) -> bool:
    """True if the last dotted segment is a language code ("a.book.ja")."""
    return symbol_name.split(".")[-1] in ISO_LANGUAGE_CODES


def has_right_to_left_specifier(symbol_name: str) -> bool:
    return symbol_name.endswith(RIGHT_TO_LEFT_SUFFIX)


def keep_symbol(symbol_name: str, options: LocalizationOption) -> bool:
    """Apply the localization filters to one symbol name."""
    if not options & LocalizationOption.LANGUAGE_CODE and has_language_code(symbol_name):
        return False
    if not options & LocalizationOption.RIGHT_TO_LEFT and has_right_to_left_specifier(symbol_name):
        return False
    return True
