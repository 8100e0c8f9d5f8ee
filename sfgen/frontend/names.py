"""Symbol name -> Swift identifier derivation.

Symbol names are dotted lowercase phrases ("message.circle",
"person.2.fill"). Identifiers are lower camel case with numeric words
prefixed by an underscore, and wrapped in backticks when they spell a
Swift keyword:

| Symbol name      | Identifier      |
|------------------|-----------------|
| message.circle   | messageCircle   |
| person.2.fill    | person_2Fill    |
| 1.circle         | _1Circle        |
| 4k.tv            | _4kTv           |
| repeat           | `repeat`        |
"""

from __future__ import annotations

import re

# Reserved words, contextual keywords, declaration modifiers and attribute
# names that need backticks to be used as an identifier.
SWIFT_KEYWORDS = frozenset(
    {
        "__consuming",
        "__owned",
        "__setter_access",
        "__shared",
        "_alignment",
        "_backDeploy",
        "_borrow",
        "_cdecl",
        "_Class",
        "_compilerInitialized",
        "_const",
        "_documentation",
        "_dynamicReplacement",
        "_effects",
        "_expose",
        "_forward",
        "_implements",
        "_linear",
        "_local",
        "_modify",
        "_move",
        "_NativeClass",
        "_NativeRefCountedObject",
        "_noMetadata",
        "_nonSendable",
        "_objcImplementation",
        "_objcRuntimeName",
        "_opaqueReturnTypeOf",
        "_optimize",
        "_originallyDefinedIn",
        "_PackageDescription",
        "_private",
        "_projectedValueProperty",
        "_read",
        "_RefCountedObject",
        "_semantics",
        "_specialize",
        "_spi",
        "_spi_available",
        "_swift_native_objc_runtime_base",
        "_Trivial",
        "_TrivialAtMost",
        "_typeEraser",
        "_unavailableFromAsync",
        "_underlyingVersion",
        "_UnknownLayout",
        "_version",
        "accesses",
        "actor",
        "addressWithNativeOwner",
        "addressWithOwner",
        "any",
        "Any",
        "as",
        "assignment",
        "associatedtype",
        "associativity",
        "async",
        "attached",
        "autoclosure",
        "availability",
        "available",
        "await",
        "backDeployed",
        "before",
        "block",
        "borrowing",
        "break",
        "canImport",
        "case",
        "catch",
        "class",
        "compiler",
        "consume",
        "consuming",
        "continue",
        "convenience",
        "convention",
        "copy",
        "cType",
        "default",
        "defer",
        "deinit",
        "deprecated",
        "derivative",
        "didSet",
        "differentiable",
        "discard",
        "distributed",
        "do",
        "dynamic",
        "each",
        "else",
        "enum",
        "escaping",
        "exclusivity",
        "exported",
        "extension",
        "fallthrough",
        "false",
        "file",
        "fileprivate",
        "final",
        "for",
        "forward",
        "func",
        "get",
        "guard",
        "higherThan",
        "if",
        "import",
        "in",
        "indirect",
        "infix",
        "init",
        "initializes",
        "inline",
        "inout",
        "internal",
        "introduced",
        "is",
        "isolated",
        "kind",
        "lazy",
        "left",
        "let",
        "line",
        "linear",
        "lowerThan",
        "macro",
        "message",
        "metadata",
        "module",
        "mutableAddressWithNativeOwner",
        "mutableAddressWithOwner",
        "mutating",
        "nil",
        "noasync",
        "noDerivative",
        "noescape",
        "none",
        "nonisolated",
        "nonmutating",
        "objc",
        "obsoleted",
        "of",
        "open",
        "operator",
        "optional",
        "override",
        "package",
        "postfix",
        "precedencegroup",
        "prefix",
        "private",
        "Protocol",
        "protocol",
        "public",
        "reasync",
        "renamed",
        "repeat",
        "required",
        "rethrows",
        "return",
        "reverse",
        "right",
        "safe",
        "self",
        "Self",
        "Sendable",
        "set",
        "some",
        "sourceFile",
        "spi",
        "spiModule",
        "static",
        "struct",
        "subscript",
        "super",
        "swift",
        "switch",
        "target",
        "throw",
        "throws",
        "transpose",
        "true",
        "try",
        "Type",
        "typealias",
        "unavailable",
        "unchecked",
        "unowned",
        "unsafe",
        "unsafeAddress",
        "unsafeMutableAddress",
        "var",
        "visibility",
        "weak",
        "where",
        "while",
        "willSet",
        "witness_method",
        "wrt",
        "yield",
    }
)

# A word is a run of letters and digits; everything else separates words.
_WORD = re.compile(r"[^\W_]+")
# Boundaries inside a mixed-case run: lower->Upper, letter<->digit.
_COMPOUND = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|\d+|[^\W\d_]+")


def _split_compound(word: str) -> list[str]:
    if word.islower() or word.isupper() or word.isdigit():
        return [word]
    return _COMPOUND.findall(word)


def tokenize(raw_name: str) -> list[str]:
    """Segment raw_name into words.

    All-lowercase runs stay whole ("circlepath", "gen1"); mixed-case runs
    split at case and digit boundaries ("iCloudDrive" -> i, Cloud, Drive).
    """
    tokens: list[str] = []
    for word in _WORD.findall(raw_name):
        tokens.extend(_split_compound(word))
    return tokens


def _compose(tokens: list[str]) -> str:
    parts: list[str] = []
    for i, token in enumerate(tokens):
        if token.isdigit():
            parts.append("_" + token)
        elif i == 0:
            # identifiers cannot start with a digit
            prefix = "_" if token[0].isdigit() else ""
            parts.append(prefix + token.lower())
        else:
            parts.append(token[0].upper() + token[1:].lower())
    return "".join(parts)


def derive_identifier(raw_name: str) -> str:
    """Return the Swift identifier for a symbol name."""
    tokens = tokenize(raw_name)
    if not tokens:
        return "_"
    identifier = _compose(tokens)
    if identifier in SWIFT_KEYWORDS:
        return "`" + identifier + "`"
    return identifier
