"""Catalog -> Swift file IR, and the end-to-end generate() entry point.

Output layout:

    import Foundation
    #if canImport(<Framework>)      one guarded import per companion
    import <Framework>
    #endif

    struct SFSymbolResource         the support type
    extension SFSymbolResource      one accessor per exported symbol
    #if <guard>                     per companion framework: image init
    extension <Image> { init }      plus a mirror accessor per symbol
    extension <Image> { accessors }
    #endif

Every accessor (support and mirror) runs through the same mutator chain,
keyed by the symbol's raw name.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sfgen.backend.swift import SwiftRenderer
from sfgen.frontend.catalog import Catalog
from sfgen.frontend.localization import LocalizationOption, keep_symbol
from sfgen.frontend.names import derive_identifier
from sfgen.ir import (
    ACCESS_MODIFIERS,
    STRING_TYPE,
    AccessModifier,
    Assignment,
    AvailableAttribute,
    CodeBlock,
    ConditionalCompilation,
    Commentable,
    Declaration,
    DocComment,
    Extension,
    FileDescription,
    ForceUnwrap,
    Function,
    FunctionArgument,
    FunctionCall,
    FunctionSignature,
    IdentifierRef,
    Import,
    Initializer,
    MemberAccess,
    NilLit,
    Parameter,
    PlatformAvailability,
    StringLit,
    Struct,
    SupportedPlatform,
    Unavailable,
    Variable,
    WithAttribute,
    type_named,
)
from sfgen.middleend import Mutator, apply_mutators, default_mutators

RESOURCE_TYPE = "SFSymbolResource"

EXTENSIONS: tuple[str, ...] = ("SwiftUI", "UIKit", "AppKit")


class GenerateError(Exception):
    """Invalid generation options or an unexportable catalog."""

    def __init__(self, msg: str):
        self.msg: str = msg
        super().__init__(msg)


class IdentifierCollisionError(GenerateError):
    """Two symbol names derive the same Swift identifier."""

    def __init__(self, identifier: str, first: str, second: str):
        self.identifier: str = identifier
        self.first: str = first
        self.second: str = second
        super().__init__(f"symbols '{first}' and '{second}' both map to identifier '{identifier}'")


@dataclass(frozen=True)
class GenerateOptions:
    access_modifier: AccessModifier = "internal"
    enabled_extensions: tuple[str, ...] = EXTENSIONS
    export_semantic_symbols: bool = True
    localization: LocalizationOption = LocalizationOption.NONE


@dataclass(frozen=True)
class Accessor:
    """One exported accessor.

    raw_name is the name the identifier derives from. symbol_name keys the
    mutator chain and is the system name passed to SFSymbolResource; the
    two differ only for semantic aliases.
    """

    identifier: str
    raw_name: str
    symbol_name: str
    doc: str


@dataclass(frozen=True)
class Companion:
    """A UI framework image type that gains an initializer and mirrors."""

    name: str
    condition: str
    image_type: str
    is_class: bool
    init_label: str
    extra_arguments: list[FunctionArgument] = field(default_factory=list)
    header: list[AvailableAttribute] = field(default_factory=list)


COMPANIONS: dict[str, Companion] = {
    "SwiftUI": Companion(
        name="SwiftUI",
        condition="canImport(SwiftUI)",
        image_type="SwiftUI.Image",
        is_class=False,
        init_label="systemName",
        header=[
            PlatformAvailability(
                [
                    SupportedPlatform("iOS", "13.0"),
                    SupportedPlatform("macOS", "11.0"),
                    SupportedPlatform("tvOS", "13.0"),
                    SupportedPlatform("watchOS", "6.0"),
                ]
            )
        ],
    ),
    "UIKit": Companion(
        name="UIKit",
        condition="canImport(UIKit) && !os(watchOS)",
        image_type="UIKit.UIImage",
        is_class=True,
        init_label="systemName",
        header=[
            PlatformAvailability([SupportedPlatform("iOS", "13.0"), SupportedPlatform("tvOS", "13.0")]),
            Unavailable("watchOS"),
        ],
    ),
    "AppKit": Companion(
        name="AppKit",
        condition="canImport(AppKit)",
        image_type="AppKit.NSImage",
        is_class=True,
        init_label="systemSymbolName",
        extra_arguments=[FunctionArgument(NilLit(), "accessibilityDescription")],
        header=[PlatformAvailability([SupportedPlatform("macOS", "11.0")])],
    ),
}


# --- symbol selection ---


def check_options(options: GenerateOptions) -> None:
    if options.access_modifier not in ACCESS_MODIFIERS:
        raise GenerateError(f"unknown access modifier '{options.access_modifier}'")
    for name in options.enabled_extensions:
        if name not in COMPANIONS:
            raise GenerateError(f"unknown extension '{name}' (expected one of: {', '.join(EXTENSIONS)})")


def enabled_companions(options: GenerateOptions) -> list[Companion]:
    """Enabled companion frameworks, deduplicated, in canonical order."""
    return [COMPANIONS[name] for name in EXTENSIONS if name in options.enabled_extensions]


def select_symbols(catalog: Catalog, options: GenerateOptions) -> list[str]:
    """Sorted symbol names that survive the localization filters."""
    return [name for name in sorted(catalog.symbols) if keep_symbol(name, options.localization)]


def symbol_doc(symbol_name: str) -> str:
    return f'The "{symbol_name}" SF Symbol.\n'


def semantic_doc(semantic_name: str, descriptive_name: str) -> str:
    return f'The "{semantic_name}" semantic alias for the "{descriptive_name}" SF Symbol.\n'


def collect_accessors(catalog: Catalog, options: GenerateOptions) -> list[Accessor]:
    """Build the accessor list in output order.

    Semantic aliases follow the symbols. An alias is exported only when its
    descriptive symbol survived filtering and its own name is not a symbol.
    Raises IdentifierCollisionError when two raw names share an identifier.
    """
    symbols = select_symbols(catalog, options)
    accessors = [Accessor(derive_identifier(name), name, name, symbol_doc(name)) for name in symbols]
    if options.export_semantic_symbols:
        exported = set(symbols)
        for semantic in sorted(catalog.semantic_to_descriptive):
            descriptive = catalog.semantic_to_descriptive[semantic]
            if descriptive not in exported or semantic in catalog.symbols:
                continue
            doc = semantic_doc(semantic, descriptive)
            accessors.append(Accessor(derive_identifier(semantic), semantic, descriptive, doc))
    owners: dict[str, str] = {}
    for accessor in accessors:
        if accessor.identifier in owners:
            raise IdentifierCollisionError(accessor.identifier, owners[accessor.identifier], accessor.raw_name)
        owners[accessor.identifier] = accessor.raw_name
    return accessors


# --- declarations ---


def _modifier(options: GenerateOptions) -> AccessModifier | None:
    """None for internal, which renders without a keyword."""
    if options.access_modifier == "internal":
        return None
    return options.access_modifier


def _self_init(arguments: list[FunctionArgument]) -> FunctionCall:
    return FunctionCall(MemberAccess("init", IdentifierRef("self")), arguments)


def _resource_system_name() -> MemberAccess:
    return MemberAccess("systemName", IdentifierRef("resource"))


def support_struct(options: GenerateOptions) -> Declaration:
    """The Hashable wrapper every accessor returns."""
    system_name = Commentable(
        DocComment("A SFSymbol system name."),
        Variable(IdentifierRef("systemName"), kind="let", access_modifier="fileprivate", type=STRING_TYPE),
    )
    initializer = Commentable(
        DocComment(f"Initialize a `{RESOURCE_TYPE}` with `systemName`."),
        Function(
            FunctionSignature(
                Initializer(),
                [Parameter(STRING_TYPE, label="systemName", name="name")],
                access_modifier=_modifier(options),
            ),
            [CodeBlock(Assignment(MemberAccess("systemName", IdentifierRef("self")), IdentifierRef("name")))],
        ),
    )
    return Commentable(
        DocComment("A SFSymbol resource."),
        Struct(
            RESOURCE_TYPE,
            [system_name, initializer],
            access_modifier=_modifier(options),
            conformances=["Hashable"],
        ),
    )


def accessor_declaration(accessor: Accessor, value_type: str, value: FunctionCall, options: GenerateOptions) -> Declaration:
    """`static var <identifier>: <value_type> { <value> }` under its doc comment."""
    return Commentable(
        DocComment(accessor.doc),
        Variable(
            IdentifierRef(accessor.identifier),
            access_modifier=_modifier(options),
            is_static=True,
            type=type_named(value_type),
            getter=[CodeBlock(value)],
        ),
    )


def resource_accessor(accessor: Accessor, options: GenerateOptions) -> Declaration:
    value = FunctionCall(
        IdentifierRef(RESOURCE_TYPE),
        [FunctionArgument(StringLit(accessor.symbol_name), "systemName")],
    )
    return accessor_declaration(accessor, RESOURCE_TYPE, value, options)


def mirror_accessor(accessor: Accessor, companion: Companion, options: GenerateOptions) -> Declaration:
    value = FunctionCall(
        IdentifierRef(companion.image_type),
        [FunctionArgument(MemberAccess(accessor.identifier), "systemSymbolResource")],
    )
    return accessor_declaration(accessor, companion.image_type, value, options)


def image_initializer(companion: Companion, options: GenerateOptions) -> Declaration:
    """`init(systemSymbolResource:)` on the companion's image type."""
    call: FunctionCall | ForceUnwrap = _self_init(
        [FunctionArgument(_resource_system_name(), companion.init_label)] + list(companion.extra_arguments)
    )
    if companion.is_class:
        call = ForceUnwrap(call)
    short_name = companion.image_type.split(".")[-1]
    return Commentable(
        DocComment(f"Initialize a `{short_name}` with a SFSymbol resource."),
        Function(
            FunctionSignature(
                Initializer(is_convenience=companion.is_class),
                [Parameter(type_named(RESOURCE_TYPE), label="systemSymbolResource", name="resource")],
                access_modifier=_modifier(options),
            ),
            [CodeBlock(call)],
        ),
    )


def with_header(companion: Companion, declaration: Declaration) -> Declaration:
    """Stack the companion's availability header, first attribute on top."""
    for attribute in reversed(companion.header):
        declaration = WithAttribute(attribute, declaration)
    return declaration


def companion_block(
    companion: Companion,
    accessors: list[Accessor],
    mutators: list[Mutator],
    options: GenerateOptions,
) -> Declaration:
    mirrors = [
        apply_mutators(mirror_accessor(accessor, companion, options), accessor.symbol_name, mutators)
        for accessor in accessors
    ]
    return ConditionalCompilation(
        companion.condition,
        [
            with_header(companion, Extension(companion.image_type, [image_initializer(companion, options)])),
            with_header(companion, Extension(companion.image_type, mirrors)),
        ],
    )


def companion_import(companion: Companion) -> Import:
    return Import(companion.name, can_import=[companion.name])


# --- file ---


def build_file(catalog: Catalog, options: GenerateOptions) -> FileDescription:
    """Assemble the complete file IR for the catalog."""
    check_options(options)
    accessors = collect_accessors(catalog, options)
    mutators = default_mutators(catalog)
    companions = enabled_companions(options)
    resources = [
        apply_mutators(resource_accessor(accessor, options), accessor.symbol_name, mutators) for accessor in accessors
    ]
    declarations: list[Declaration] = [support_struct(options), Extension(RESOURCE_TYPE, resources)]
    for companion in companions:
        declarations.append(companion_block(companion, accessors, mutators, options))
    imports = [Import("Foundation")] + [companion_import(c) for c in companions]
    return FileDescription(code_blocks=[CodeBlock(d) for d in declarations], imports=imports)


def generate(catalog: Catalog, options: GenerateOptions | None = None) -> str:
    """Generate the Swift source text for catalog."""
    if options is None:
        options = GenerateOptions()
    return SwiftRenderer().render_file(build_file(catalog, options))
