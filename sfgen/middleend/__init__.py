"""IR mutation passes (symbol-keyed, return new trees)."""

from collections.abc import Callable, Sequence

from ..frontend.catalog import Catalog
from ..ir import Declaration

from .mutators import (
    DEPRECATION_MESSAGE,
    AvailabilityMutator,
    DeclarationMutator,
    DeprecationMutator,
    RestrictionMutator,
    attach_attribute,
    platform_availability,
)

Mutator = Callable[[Declaration, str], Declaration]


def default_mutators(catalog: Catalog) -> list[Mutator]:
    """The fixed chain: restriction, deprecation, then availability.

    The last-applied attribute renders outermost, so availability sits
    directly under the doc comment and deprecation directly above the
    declaration.
    """
    return [
        RestrictionMutator(catalog.symbol_restrictions),
        DeprecationMutator(catalog.name_aliases),
        AvailabilityMutator(catalog),
    ]


def apply_mutators(declaration: Declaration, symbol_name: str, mutators: Sequence[Mutator]) -> Declaration:
    """Run declaration through every mutator in order."""
    for mutator in mutators:
        declaration = mutator(declaration, symbol_name)
    return declaration


__all__ = [
    "DEPRECATION_MESSAGE",
    "AvailabilityMutator",
    "DeclarationMutator",
    "DeprecationMutator",
    "Mutator",
    "RestrictionMutator",
    "apply_mutators",
    "attach_attribute",
    "default_mutators",
    "platform_availability",
]
