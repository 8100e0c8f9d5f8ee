"""Symbol-keyed declaration mutators: availability, deprecation, restriction.

Each mutator looks the symbol up in its own table and either returns the
declaration unchanged (lookup miss) or a wrapped copy. Inputs are never
modified in place.
"""

from __future__ import annotations

from sfgen.frontend.catalog import Catalog, MissingAvailabilityError, YearMapping
from sfgen.ir import (
    AvailableAttribute,
    Commentable,
    Declaration,
    Deprecated,
    DocComment,
    PlatformAvailability,
    SupportedPlatform,
    WithAttribute,
)

DEPRECATION_MESSAGE = (
    "This name has been deprecated. You should use a more modern name "
    "if your app does not need to support older platforms."
)


class DeclarationMutator:
    """Base for mutators. Subclasses override mutate()."""

    def mutate(self, declaration: Declaration, symbol_name: str) -> Declaration:
        raise NotImplementedError

    def __call__(self, declaration: Declaration, symbol_name: str) -> Declaration:
        return self.mutate(declaration, symbol_name)


def attach_attribute(declaration: Declaration, attribute: AvailableAttribute) -> Declaration:
    """Wrap declaration in attribute, keeping a leading comment on top."""
    if isinstance(declaration, Commentable):
        return Commentable(declaration.comment, WithAttribute(attribute, declaration.declaration))
    return WithAttribute(attribute, declaration)


def platform_availability(release: YearMapping) -> PlatformAvailability:
    """Build the @available platform list in its fixed output order.

    Mac Catalyst shares the iOS version.
    """
    return PlatformAvailability(
        [
            SupportedPlatform("iOS", release.ios),
            SupportedPlatform("macOS", release.macos),
            SupportedPlatform("macCatalyst", release.ios),
            SupportedPlatform("tvOS", release.tvos),
            SupportedPlatform("visionOS", release.visionos),
            SupportedPlatform("watchOS", release.watchos),
        ]
    )


class AvailabilityMutator(DeclarationMutator):
    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def mutate(self, declaration: Declaration, symbol_name: str) -> Declaration:
        key = self._catalog.symbols.get(symbol_name)
        if key is None:
            return declaration
        release = self._catalog.year_to_release.get(key)
        if release is None:
            raise MissingAvailabilityError(symbol_name, key)
        return attach_attribute(declaration, platform_availability(release))


class DeprecationMutator(DeclarationMutator):
    def __init__(self, name_aliases: dict[str, str]) -> None:
        self._name_aliases = name_aliases

    def mutate(self, declaration: Declaration, symbol_name: str) -> Declaration:
        renamed = self._name_aliases.get(symbol_name)
        if renamed is None:
            return declaration
        return attach_attribute(declaration, Deprecated(DEPRECATION_MESSAGE, renamed))


class RestrictionMutator(DeclarationMutator):
    """Add an `- Important:` callout carrying the symbol's usage restriction.

    An existing doc comment keeps its text and gains a blank line plus the
    callout; anything else gets a new doc comment holding only the callout.
    """

    def __init__(self, symbol_restrictions: dict[str, str]) -> None:
        self._symbol_restrictions = symbol_restrictions

    def mutate(self, declaration: Declaration, symbol_name: str) -> Declaration:
        restriction = self._symbol_restrictions.get(symbol_name)
        if restriction is None:
            return declaration
        callout = f"- Important: {restriction}"
        if isinstance(declaration, Commentable) and isinstance(declaration.comment, DocComment):
            body = declaration.comment.text.rstrip("\n")
            return Commentable(DocComment(f"{body}\n\n{callout}"), declaration.declaration)
        return Commentable(DocComment(callout), declaration)
