"""sfgen IR - Swift declaration and expression representation.

This module defines the complete IR type system and serves as the reference
for what the generator can express. Each node's docstring documents its
semantics and invariants.

Architecture:
    Catalog -> Frontend (filter, derive names, build) -> [IR] -> Middleend (mutators) -> Backend -> Swift

Frontend produces IR trees. Middleend wraps them with attributes and comments.
Backend renders text. Nodes own their children exclusively (trees, no sharing).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


AccessModifier = Literal["public", "package", "internal", "fileprivate", "private"]
"""Swift access level applied to a declaration.

| Modifier    | Visible to                          |
|-------------|-------------------------------------|
| public      | any module                          |
| package     | modules in the same package         |
| internal    | the defining module (Swift default) |
| fileprivate | the defining file                   |
| private     | the enclosing declaration           |
"""

ACCESS_MODIFIERS: tuple[str, ...] = ("public", "package", "internal", "fileprivate", "private")

BindingKind = Literal["var", "let"]

KeywordKind = Literal["return", "try", "try?", "await", "throw", "yield"]

FunctionKeyword = Literal["throws", "async"]


# ============================================================
# COMMENTS
# ============================================================


@dataclass
class Comment:
    """Base for all comments. Abstract."""

    text: str

    @property
    def contents(self) -> str:
        return self.text


@dataclass
class InlineComment(Comment):
    """Plain comment: `// text`"""


@dataclass
class DocComment(Comment):
    """Documentation comment: `/// text`

    Multi-line text renders one `///` line per source line. Empty lines
    render as a bare `///`.
    """


@dataclass
class MarkComment(Comment):
    """Section marker: `// MARK: text` or `// MARK: - text`"""

    section_break: bool = False


# ============================================================
# ATTRIBUTES
# ============================================================


@dataclass
class SupportedPlatform:
    """One `<platform> <version>` pair inside @available.

    Version is free-form text; it is not validated before rendering.
    """

    name: str
    version: str


@dataclass
class AvailableAttribute:
    """Base for @available attribute forms. Abstract."""


@dataclass
class PlatformAvailability(AvailableAttribute):
    """@available(iOS 13.0, macOS 10.15, *)

    Invariants:
    - platforms keep their construction order (never re-sorted)
    - the trailing wildcard is implicit and always rendered
    """

    platforms: list[SupportedPlatform] = field(default_factory=list)


@dataclass
class Deprecated(AvailableAttribute):
    """@available(*, deprecated, message: "...", renamed: "...")

    message and renamed segments are omitted when None.
    """

    message: str | None = None
    renamed: str | None = None


@dataclass
class Unavailable(AvailableAttribute):
    """@available(watchOS, unavailable)"""

    platform: str


# ============================================================
# TYPES
#
# References to existing types; the IR never defines type semantics.
# ============================================================


@dataclass
class ExistingType:
    """Base for type references. Abstract."""


@dataclass
class TypeName(ExistingType):
    """Possibly-qualified type name: `String`, `UIKit.UIImage`.

    Invariants:
    - components is non-empty
    """

    components: list[str]


@dataclass
class OptionalType(ExistingType):
    """`T?`"""

    wrapped: ExistingType


@dataclass
class ArrayType(ExistingType):
    """`[T]`"""

    element: ExistingType


@dataclass
class DictionaryValueType(ExistingType):
    """`[String: T]`"""

    value: ExistingType


@dataclass
class GenericType(ExistingType):
    """`Wrapper<Wrapped>`"""

    wrapper: ExistingType
    wrapped: ExistingType


@dataclass
class AnyType(ExistingType):
    """`any P`"""

    wrapped: ExistingType


def type_named(name: str) -> TypeName:
    """Factory for a dotted type name."""
    return TypeName(name.split("."))


STRING_TYPE = TypeName(["String"])
INT_TYPE = TypeName(["Int"])
BOOL_TYPE = TypeName(["Bool"])


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Expression:
    """Base for all expressions. Abstract."""


# --- Literals ---


@dataclass
class StringLit(Expression):
    """String literal. value is the exact content, unescaped."""

    value: str


@dataclass
class IntLit(Expression):
    value: int


@dataclass
class FloatLit(Expression):
    """Floating-point literal rendered with a fixed number of decimals.

    Invariants:
    - precision >= 0
    """

    value: float
    precision: int = 1


@dataclass
class BoolLit(Expression):
    value: bool


@dataclass
class NilLit(Expression):
    pass


@dataclass
class ArrayLit(Expression):
    """Array literal `[a, b]`. Non-empty arrays render one item per line."""

    items: list[Expression] = field(default_factory=list)


# --- References ---


@dataclass
class IdentifierRef(Expression):
    """A name or pattern used as written: `self`, `name`, `_`."""

    name: str


@dataclass
class TypeRef(Expression):
    """A type used in expression position: `UIKit.UIImage`."""

    type: ExistingType


@dataclass
class MemberAccess(Expression):
    """left.right, or implicit-member `.right` when left is None."""

    right: str
    left: Expression | None = None


# --- Calls ---


@dataclass
class FunctionArgument:
    """One call argument; label None means unlabeled."""

    expression: Expression
    label: str | None = None


@dataclass
class Closure(Expression):
    """Closure literal `{ a, b in ... }`; body None renders `{}` across two lines."""

    argument_names: list[str] = field(default_factory=list)
    body: list[CodeBlock] | None = None


@dataclass
class FunctionCall(Expression):
    """callee(args...) with an optional trailing closure.

    Single-argument calls render on one line; multi-argument calls
    render one argument per line.
    """

    called: Expression
    arguments: list[FunctionArgument] = field(default_factory=list)
    trailing_closure: Closure | None = None


# --- Operators ---


@dataclass
class Assignment(Expression):
    """left = right"""

    left: Expression
    right: Expression


@dataclass
class BinaryOp(Expression):
    """left op right. op is rendered verbatim (`+`, `==`, `&&`, `??`, ...)."""

    op: str
    left: Expression
    right: Expression


@dataclass
class InOut(Expression):
    """Address-of argument: `&expr`"""

    referenced: Expression


@dataclass
class OptionalChaining(Expression):
    """`expr?`"""

    referenced: Expression


@dataclass
class ForceUnwrap(Expression):
    """`expr!`"""

    referenced: Expression


@dataclass
class TupleExpr(Expression):
    """`(a, b, c)`"""

    members: list[Expression] = field(default_factory=list)


@dataclass
class UnaryKeyword(Expression):
    """Keyword-prefixed expression: `return x`, `try foo()`, bare `return`."""

    kind: KeywordKind
    expression: Expression | None = None


@dataclass
class ValueBinding(Expression):
    """`let x = call(...)` used as an expression (e.g. in conditions)."""

    kind: BindingKind
    value: FunctionCall


# --- Control constructs ---


@dataclass
class SwitchCaseKind:
    """Base for switch case heads. Abstract."""


@dataclass
class CaseKind(SwitchCaseKind):
    """`case .foo` or `case let .foo(a, b)`"""

    expression: Expression
    associated_value_names: list[str] = field(default_factory=list)


@dataclass
class MultiCase(SwitchCaseKind):
    """`case .a, .b`"""

    expressions: list[Expression]


@dataclass
class DefaultCase(SwitchCaseKind):
    """`default`"""


@dataclass
class SwitchCase:
    kind: SwitchCaseKind
    body: list[CodeBlock] = field(default_factory=list)


@dataclass
class Switch(Expression):
    switched: Expression
    cases: list[SwitchCase] = field(default_factory=list)


@dataclass
class IfBranch:
    condition: Expression
    body: list[CodeBlock] = field(default_factory=list)


@dataclass
class If(Expression):
    """if / else if / else chain.

    Invariants:
    - else_body None means no else clause; [] means an empty else clause
    """

    if_branch: IfBranch
    else_if_branches: list[IfBranch] = field(default_factory=list)
    else_body: list[CodeBlock] | None = None


@dataclass
class DoStatement(Expression):
    """do { } catch { }. catch_body None omits the catch clause."""

    body: list[CodeBlock] = field(default_factory=list)
    catch_body: list[CodeBlock] | None = None


# ============================================================
# DECLARATIONS
# ============================================================


@dataclass
class Declaration:
    """Base for all declarations. Abstract."""


@dataclass
class Commentable(Declaration):
    """A declaration preceded by a comment.

    Mutators keep the comment outermost so it always renders above any
    attribute.
    """

    comment: Comment | None
    declaration: Declaration


@dataclass
class WithAttribute(Declaration):
    """A declaration preceded by one @available attribute line.

    Nesting stacks attributes: the outer node renders first.
    """

    attribute: AvailableAttribute
    declaration: Declaration


@dataclass
class Variable(Declaration):
    """Stored or computed property.

    Semantics:
    - right set: `var x: T = right`
    - getter set: computed property `var x: T { getter }`
    - getter_effects, setter or modify set: explicit `get {}` accessor
    """

    left: Expression
    kind: BindingKind = "var"
    access_modifier: AccessModifier | None = None
    is_static: bool = False
    type: ExistingType | None = None
    right: Expression | None = None
    getter: list[CodeBlock] | None = None
    getter_effects: list[FunctionKeyword] = field(default_factory=list)
    setter: list[CodeBlock] | None = None
    modify: list[CodeBlock] | None = None


@dataclass
class WhereRequirement:
    """`left: right` conformance requirement."""

    left: str
    right: str


@dataclass
class Extension(Declaration):
    on_type: str
    declarations: list[Declaration] = field(default_factory=list)
    access_modifier: AccessModifier | None = None
    conformances: list[str] = field(default_factory=list)
    where_clause: list[WhereRequirement] = field(default_factory=list)


@dataclass
class Struct(Declaration):
    name: str
    members: list[Declaration] = field(default_factory=list)
    access_modifier: AccessModifier | None = None
    conformances: list[str] = field(default_factory=list)


@dataclass
class Protocol(Declaration):
    name: str
    members: list[Declaration] = field(default_factory=list)
    access_modifier: AccessModifier | None = None
    conformances: list[str] = field(default_factory=list)


@dataclass
class EnumDecl(Declaration):
    """enum declaration. @frozen is emitted for frozen public/package enums."""

    name: str
    members: list[Declaration] = field(default_factory=list)
    access_modifier: AccessModifier | None = None
    conformances: list[str] = field(default_factory=list)
    is_frozen: bool = False
    is_indirect: bool = False


@dataclass
class EnumCaseAssociatedValue:
    type: ExistingType
    label: str | None = None


@dataclass
class EnumCase(Declaration):
    """`case name`, `case name = raw`, or `case name(T, label: U)`.

    Invariants:
    - raw_value and associated_values are mutually exclusive
    - raw_value is a literal expression
    """

    name: str
    raw_value: Expression | None = None
    associated_values: list[EnumCaseAssociatedValue] = field(default_factory=list)


@dataclass
class TypeAlias(Declaration):
    name: str
    existing_type: ExistingType
    access_modifier: AccessModifier | None = None


@dataclass
class Parameter:
    """Function parameter.

    | label | name   | Renders         |
    |-------|--------|-----------------|
    | None  | "x"    | `_ x: T`        |
    | "x"   | "x"    | `x: T`          |
    | "for" | "name" | `for name: T`   |
    """

    type: ExistingType
    label: str | None = None
    name: str | None = None
    default_value: Expression | None = None


@dataclass
class FunctionKind:
    """Base for function heads. Abstract."""


@dataclass
class Initializer(FunctionKind):
    """`init` / `init?`; convenience initializers set is_convenience."""

    is_failable: bool = False
    is_convenience: bool = False


@dataclass
class NamedFunction(FunctionKind):
    name: str
    is_static: bool = False


@dataclass
class FunctionSignature:
    kind: FunctionKind
    parameters: list[Parameter] = field(default_factory=list)
    access_modifier: AccessModifier | None = None
    keywords: list[FunctionKeyword] = field(default_factory=list)
    return_type: Expression | None = None


@dataclass
class Function(Declaration):
    """Function or initializer. body None renders a bodiless requirement."""

    signature: FunctionSignature
    body: list[CodeBlock] | None = None


@dataclass
class ConditionalCompilation(Declaration):
    """`#if condition` ... `#endif` around declarations.

    The guarded declarations render at the container's indent depth.
    """

    condition: str
    declarations: list[Declaration] = field(default_factory=list)


# ============================================================
# BLOCKS AND FILES
# ============================================================


@dataclass
class CodeBlock:
    """One statement-level item with an optional leading comment.

    Invariants:
    - item is a Declaration or an Expression
    """

    item: Declaration | Expression
    comment: Comment | None = None


@dataclass
class Import:
    """Import statement, optionally guarded by canImport.

    Semantics:
    - can_import set: wrapped in `#if canImport(A) || canImport(B)`
    - module_types set: one `import <type>` line per entry
    - preconcurrency "on_os" renders both branches under `#if os(...)`
    """

    module_name: str
    spi: str | None = None
    module_types: list[str] | None = None
    can_import: list[str] | None = None
    preconcurrency: Literal["always", "never", "on_os"] = "never"
    preconcurrency_os: list[str] = field(default_factory=list)


@dataclass
class FileDescription:
    """A complete Swift source file."""

    code_blocks: list[CodeBlock] = field(default_factory=list)
    imports: list[Import] = field(default_factory=list)
    top_comment: Comment | None = None
