"""SwiftRenderer: IR -> Swift source text.

Expressions and declarations are written through the Emitter line buffer.
Sub-renderers never return strings to their callers; a routine that needs
to extend the current line calls continue_line() before writing, so a call's
receiver, arguments and trailing closure each write their own piece of one
visual line. Unhandled IR nodes raise NotImplementedError so gaps are obvious.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeVar

from sfgen.backend.util import Emitter, quote_string, split_lines
from sfgen.ir import (
    AnyType,
    ArrayLit,
    ArrayType,
    Assignment,
    AvailableAttribute,
    BinaryOp,
    BoolLit,
    CaseKind,
    Closure,
    CodeBlock,
    Comment,
    Commentable,
    ConditionalCompilation,
    Declaration,
    DefaultCase,
    Deprecated,
    DictionaryValueType,
    DocComment,
    DoStatement,
    EnumCase,
    EnumCaseAssociatedValue,
    EnumDecl,
    ExistingType,
    Expression,
    Extension,
    FileDescription,
    FloatLit,
    ForceUnwrap,
    Function,
    FunctionArgument,
    FunctionCall,
    FunctionKind,
    FunctionSignature,
    GenericType,
    IdentifierRef,
    If,
    Import,
    InlineComment,
    InOut,
    Initializer,
    IntLit,
    MarkComment,
    MemberAccess,
    MultiCase,
    NamedFunction,
    NilLit,
    OptionalChaining,
    OptionalType,
    Parameter,
    PlatformAvailability,
    Protocol,
    StringLit,
    Struct,
    Switch,
    SwitchCase,
    SwitchCaseKind,
    TupleExpr,
    TypeAlias,
    TypeName,
    TypeRef,
    UnaryKeyword,
    Unavailable,
    ValueBinding,
    Variable,
    WithAttribute,
)

T = TypeVar("T")


def _with_last_marker(items: Sequence[T]) -> Iterator[tuple[T, bool]]:
    last = len(items) - 1
    for i, item in enumerate(items):
        yield item, i == last


def _comment_prefix(comment: Comment) -> str:
    if isinstance(comment, DocComment):
        return "///"
    if isinstance(comment, MarkComment):
        return "// MARK: -" if comment.section_break else "// MARK:"
    if isinstance(comment, InlineComment):
        return "//"
    raise NotImplementedError(f"Swift comment: {comment}")


class SwiftRenderer(Emitter):
    """Render Swift code from IR."""

    def __init__(self) -> None:
        super().__init__()

    def render_file(self, file: FileDescription) -> str:
        self.lines = []
        self.indent = 0
        self.append_next = False
        if file.top_comment is not None:
            self._emit_comment(file.top_comment)
        for imp in file.imports:
            self._emit_import(imp)
        if file.imports and file.code_blocks:
            self.line("")
        for block in file.code_blocks:
            self._emit_code_block(block)
            self.line("")
        return self.output()

    # ── comments and imports ─────────────────────────────────

    def _emit_comment(self, comment: Comment) -> None:
        prefix = _comment_prefix(comment)
        for text in split_lines(comment.contents):
            if text:
                self.line(f"{prefix} {text}")
            else:
                self.line(prefix)

    def _emit_import(self, imp: Import) -> None:
        if imp.preconcurrency == "on_os":
            checks = " || ".join(f"os({name})" for name in imp.preconcurrency_os)
            self.line(f"#if {checks}")
            self._emit_import_lines(imp, preconcurrency=True)
            self.line("#else")
            self._emit_import_lines(imp, preconcurrency=False)
            self.line("#endif")
        else:
            self._emit_import_lines(imp, preconcurrency=imp.preconcurrency == "always")

    def _emit_import_lines(self, imp: Import, preconcurrency: bool) -> None:
        if imp.can_import is not None:
            checks = " || ".join(f"canImport({name})" for name in imp.can_import)
            self.line(f"#if {checks}")
        prefix = ""
        if preconcurrency:
            prefix += "@preconcurrency "
        if imp.spi is not None:
            prefix += f"@_spi({imp.spi}) "
        if imp.module_types is not None:
            for typ in imp.module_types:
                self.line(f"{prefix}import {typ}")
        else:
            self.line(f"{prefix}import {imp.module_name}")
        if imp.can_import is not None:
            self.line("#endif")

    # ── helpers ──────────────────────────────────────────────

    def _type(self, typ: ExistingType) -> str:
        if isinstance(typ, TypeName):
            return ".".join(typ.components)
        if isinstance(typ, OptionalType):
            return f"{self._type(typ.wrapped)}?"
        if isinstance(typ, ArrayType):
            return f"[{self._type(typ.element)}]"
        if isinstance(typ, DictionaryValueType):
            return f"[String: {self._type(typ.value)}]"
        if isinstance(typ, GenericType):
            return f"{self._type(typ.wrapper)}<{self._type(typ.wrapped)}>"
        if isinstance(typ, AnyType):
            return f"any {self._type(typ.wrapped)}"
        raise NotImplementedError(f"Swift type: {typ}")

    def _emit_prefix_word(self, word: str | None) -> None:
        """Start a declaration line with `word ` when word is set."""
        if word is not None:
            self.line(word + " ")
            self.continue_line()

    def _emit_conformances(self, conformances: list[str]) -> None:
        if conformances:
            self.line(": " + ", ".join(conformances))
            self.continue_line()

    def _emit_member_body(self, members: list[Declaration], separated: bool) -> None:
        """Write ` {`, the members one level deeper, and `}`."""
        self.line(" {")
        if not members:
            self.continue_line()
            self.line("}")
            return
        with self.nested():
            for member, is_last in _with_last_marker(members):
                self._emit_decl(member)
                if separated and not is_last:
                    self.line("")
        self.line("}")

    # ── expressions ──────────────────────────────────────────

    def _emit_expr(self, expr: Expression) -> None:
        if isinstance(expr, (StringLit, IntLit, FloatLit, BoolLit, NilLit, ArrayLit)):
            self._emit_literal(expr)
        elif isinstance(expr, IdentifierRef):
            self.line(expr.name)
        elif isinstance(expr, TypeRef):
            self.line(self._type(expr.type))
        elif isinstance(expr, MemberAccess):
            self._emit_MemberAccess(expr)
        elif isinstance(expr, FunctionCall):
            self._emit_FunctionCall(expr)
        elif isinstance(expr, Assignment):
            self._emit_Assignment(expr)
        elif isinstance(expr, Switch):
            self._emit_Switch(expr)
        elif isinstance(expr, If):
            self._emit_If(expr)
        elif isinstance(expr, DoStatement):
            self._emit_DoStatement(expr)
        elif isinstance(expr, ValueBinding):
            self._emit_ValueBinding(expr)
        elif isinstance(expr, UnaryKeyword):
            self._emit_UnaryKeyword(expr)
        elif isinstance(expr, Closure):
            self._emit_Closure(expr)
        elif isinstance(expr, BinaryOp):
            self._emit_BinaryOp(expr)
        elif isinstance(expr, InOut):
            self.line("&")
            self.continue_line()
            self._emit_expr(expr.referenced)
        elif isinstance(expr, OptionalChaining):
            self._emit_expr(expr.referenced)
            self.continue_line()
            self.line("?")
        elif isinstance(expr, ForceUnwrap):
            self._emit_expr(expr.referenced)
            self.continue_line()
            self.line("!")
        elif isinstance(expr, TupleExpr):
            self._emit_TupleExpr(expr)
        else:
            raise NotImplementedError(f"Swift expr: {expr}")

    def _emit_literal(self, expr: Expression) -> None:
        if isinstance(expr, StringLit):
            self.line(quote_string(expr.value))
        elif isinstance(expr, IntLit):
            self.line(str(expr.value))
        elif isinstance(expr, FloatLit):
            self.line(f"{expr.value:.{expr.precision}f}")
        elif isinstance(expr, BoolLit):
            self.line("true" if expr.value else "false")
        elif isinstance(expr, NilLit):
            self.line("nil")
        elif isinstance(expr, ArrayLit):
            self.line("[")
            if expr.items:
                with self.nested():
                    for item, is_last in _with_last_marker(expr.items):
                        self._emit_expr(item)
                        if not is_last:
                            self.continue_line()
                            self.line(",")
            else:
                self.continue_line()
            self.line("]")
        else:
            raise NotImplementedError(f"Swift literal: {expr}")

    def _emit_MemberAccess(self, expr: MemberAccess) -> None:
        if expr.left is not None:
            self._emit_expr(expr.left)
            self.continue_line()
        self.line("." + expr.right)

    def _emit_argument(self, arg: FunctionArgument) -> None:
        if arg.label is not None:
            self.line(arg.label + ": ")
            self.continue_line()
        self._emit_expr(arg.expression)

    def _emit_FunctionCall(self, expr: FunctionCall) -> None:
        self._emit_expr(expr.called)
        self.continue_line()
        self.line("(")
        if len(expr.arguments) > 1:
            with self.nested():
                for arg, is_last in _with_last_marker(expr.arguments):
                    self._emit_argument(arg)
                    if not is_last:
                        self.continue_line()
                        self.line(",")
        else:
            self.continue_line()
            if expr.arguments:
                self._emit_argument(expr.arguments[0])
            self.continue_line()
        self.line(")")
        if expr.trailing_closure is not None:
            self.continue_line()
            self.line(" ")
            self.continue_line()
            self._emit_Closure(expr.trailing_closure)

    def _emit_Assignment(self, expr: Assignment) -> None:
        self._emit_expr(expr.left)
        self.continue_line()
        self.line(" = ")
        self.continue_line()
        self._emit_expr(expr.right)

    def _emit_case_kind(self, kind: SwitchCaseKind) -> None:
        if isinstance(kind, CaseKind):
            if kind.associated_value_names:
                self.line("case let ")
            else:
                self.line("case ")
            self.continue_line()
            self._emit_expr(kind.expression)
            if kind.associated_value_names:
                self.continue_line()
                self.line("(" + ", ".join(kind.associated_value_names) + ")")
        elif isinstance(kind, MultiCase):
            self.line("case ")
            for expr, is_last in _with_last_marker(kind.expressions):
                self.continue_line()
                self._emit_expr(expr)
                if not is_last:
                    self.continue_line()
                    self.line(", ")
        elif isinstance(kind, DefaultCase):
            self.line("default")
        else:
            raise NotImplementedError(f"Swift case: {kind}")

    def _emit_SwitchCase(self, case: SwitchCase) -> None:
        self._emit_case_kind(case.kind)
        self.continue_line()
        self.line(":")
        with self.nested():
            self._emit_code_blocks(case.body)

    def _emit_Switch(self, expr: Switch) -> None:
        self.line("switch ")
        self.continue_line()
        self._emit_expr(expr.switched)
        self.continue_line()
        self.line(" {")
        for case in expr.cases:
            self._emit_SwitchCase(case)
        self.line("}")

    def _emit_If(self, expr: If) -> None:
        self.line("if ")
        self.continue_line()
        self._emit_expr(expr.if_branch.condition)
        self.continue_line()
        self.line(" {")
        with self.nested():
            self._emit_code_blocks(expr.if_branch.body)
        self.line("}")
        for branch in expr.else_if_branches:
            self.continue_line()
            self.line(" else if ")
            self.continue_line()
            self._emit_expr(branch.condition)
            self.continue_line()
            self.line(" {")
            with self.nested():
                self._emit_code_blocks(branch.body)
            self.line("}")
        if expr.else_body is not None:
            self.continue_line()
            self.line(" else {")
            with self.nested():
                self._emit_code_blocks(expr.else_body)
            self.line("}")

    def _emit_DoStatement(self, expr: DoStatement) -> None:
        self.line("do {")
        with self.nested():
            self._emit_code_blocks(expr.body)
        if expr.catch_body is not None:
            self.line("} catch {")
            if expr.catch_body:
                with self.nested():
                    self._emit_code_blocks(expr.catch_body)
            else:
                self.continue_line()
        self.line("}")

    def _emit_ValueBinding(self, expr: ValueBinding) -> None:
        self.line(expr.kind + " ")
        self.continue_line()
        self._emit_FunctionCall(expr.value)

    def _emit_UnaryKeyword(self, expr: UnaryKeyword) -> None:
        self.line(expr.kind)
        if expr.expression is None:
            return
        self.continue_line()
        self.line(" ")
        self.continue_line()
        self._emit_expr(expr.expression)

    def _emit_Closure(self, expr: Closure) -> None:
        self.line("{")
        if expr.argument_names:
            self.continue_line()
            self.line(" " + ", ".join(expr.argument_names) + " in")
        if expr.body is not None:
            with self.nested():
                self._emit_code_blocks(expr.body)
        self.line("}")

    def _emit_BinaryOp(self, expr: BinaryOp) -> None:
        self._emit_expr(expr.left)
        self.continue_line()
        self.line(f" {expr.op} ")
        self.continue_line()
        self._emit_expr(expr.right)

    def _emit_TupleExpr(self, expr: TupleExpr) -> None:
        self.line("(")
        for member, is_last in _with_last_marker(expr.members):
            self.continue_line()
            self._emit_expr(member)
            if not is_last:
                self.continue_line()
                self.line(", ")
        self.continue_line()
        self.line(")")

    # ── declarations ─────────────────────────────────────────

    def _emit_decl(self, decl: Declaration) -> None:
        if isinstance(decl, Commentable):
            if decl.comment is not None:
                self._emit_comment(decl.comment)
            self._emit_decl(decl.declaration)
        elif isinstance(decl, WithAttribute):
            self._emit_attribute(decl.attribute)
            self._emit_decl(decl.declaration)
        elif isinstance(decl, Variable):
            self._emit_Variable(decl)
        elif isinstance(decl, Extension):
            self._emit_Extension(decl)
        elif isinstance(decl, Struct):
            self._emit_Struct(decl)
        elif isinstance(decl, Protocol):
            self._emit_Protocol(decl)
        elif isinstance(decl, EnumDecl):
            self._emit_EnumDecl(decl)
        elif isinstance(decl, TypeAlias):
            self._emit_TypeAlias(decl)
        elif isinstance(decl, Function):
            self._emit_Function(decl)
        elif isinstance(decl, EnumCase):
            self._emit_EnumCase(decl)
        elif isinstance(decl, ConditionalCompilation):
            self._emit_ConditionalCompilation(decl)
        else:
            raise NotImplementedError(f"Swift decl: {decl}")

    def _emit_attribute(self, attr: AvailableAttribute) -> None:
        if isinstance(attr, PlatformAvailability):
            parts = [f"{p.name} {p.version}" for p in attr.platforms]
            parts.append("*")
        elif isinstance(attr, Deprecated):
            parts = ["*", "deprecated"]
            if attr.message is not None:
                parts.append("message: " + quote_string(attr.message))
            if attr.renamed is not None:
                parts.append("renamed: " + quote_string(attr.renamed))
        elif isinstance(attr, Unavailable):
            parts = [attr.platform, "unavailable"]
        else:
            raise NotImplementedError(f"Swift attribute: {attr}")
        self.line("@available(" + ", ".join(parts) + ")")

    def _emit_Variable(self, decl: Variable) -> None:
        self._emit_prefix_word(decl.access_modifier)
        if decl.is_static:
            self._emit_prefix_word("static")
        self.line(decl.kind + " ")
        self.continue_line()
        self._emit_expr(decl.left)
        if decl.type is not None:
            self.continue_line()
            self.line(": " + self._type(decl.type))
        if decl.right is not None:
            self.continue_line()
            self.line(" = ")
            self.continue_line()
            self._emit_expr(decl.right)
        if decl.getter is None:
            return
        self.continue_line()
        self.line(" {")
        with self.nested():
            explicit_getter = bool(decl.getter_effects) or decl.setter is not None or decl.modify is not None
            if explicit_getter:
                effects = "".join(" " + effect for effect in decl.getter_effects)
                self.line(f"get{effects} {{")
                with self.nested():
                    self._emit_code_blocks(decl.getter)
                self.line("}")
            else:
                self._emit_code_blocks(decl.getter)
            if decl.modify is not None:
                self.line("_modify {")
                with self.nested():
                    self._emit_code_blocks(decl.modify)
                self.line("}")
            if decl.setter is not None:
                self.line("set {")
                with self.nested():
                    self._emit_code_blocks(decl.setter)
                self.line("}")
        self.line("}")

    def _emit_Extension(self, decl: Extension) -> None:
        self._emit_prefix_word(decl.access_modifier)
        self.line("extension " + decl.on_type)
        self.continue_line()
        self._emit_conformances(decl.conformances)
        if decl.where_clause:
            requirements = ", ".join(f"{r.left}: {r.right}" for r in decl.where_clause)
            self.line(" where " + requirements)
            self.continue_line()
        self._emit_member_body(decl.declarations, separated=True)

    def _emit_Struct(self, decl: Struct) -> None:
        self._emit_prefix_word(decl.access_modifier)
        self.line("struct " + decl.name)
        self.continue_line()
        self._emit_conformances(decl.conformances)
        self._emit_member_body(decl.members, separated=True)

    def _emit_Protocol(self, decl: Protocol) -> None:
        self._emit_prefix_word(decl.access_modifier)
        self.line("protocol " + decl.name)
        self.continue_line()
        self._emit_conformances(decl.conformances)
        self._emit_member_body(decl.members, separated=False)

    def _emit_EnumDecl(self, decl: EnumDecl) -> None:
        if decl.is_frozen and decl.access_modifier in ("public", "package"):
            self._emit_prefix_word("@frozen")
        self._emit_prefix_word(decl.access_modifier)
        if decl.is_indirect:
            self._emit_prefix_word("indirect")
        self.line("enum " + decl.name)
        self.continue_line()
        self._emit_conformances(decl.conformances)
        self._emit_member_body(decl.members, separated=False)

    def _associated_value(self, value: EnumCaseAssociatedValue) -> str:
        if value.label is not None:
            return f"{value.label}: {self._type(value.type)}"
        return self._type(value.type)

    def _emit_EnumCase(self, decl: EnumCase) -> None:
        self.line("case " + decl.name)
        if decl.raw_value is not None:
            self.continue_line()
            self.line(" = ")
            self.continue_line()
            self._emit_literal(decl.raw_value)
        elif decl.associated_values:
            values = ", ".join(self._associated_value(v) for v in decl.associated_values)
            self.continue_line()
            self.line(f"({values})")

    def _emit_TypeAlias(self, decl: TypeAlias) -> None:
        words: list[str] = []
        if decl.access_modifier is not None:
            words.append(decl.access_modifier)
        words.extend(["typealias", decl.name, "=", self._type(decl.existing_type)])
        self.line(" ".join(words))

    def _function_kind(self, kind: FunctionKind) -> str:
        if isinstance(kind, Initializer):
            head = "init?" if kind.is_failable else "init"
            if kind.is_convenience:
                return "convenience " + head
            return head
        if isinstance(kind, NamedFunction):
            if kind.is_static:
                return "static func " + kind.name
            return "func " + kind.name
        raise NotImplementedError(f"Swift function kind: {kind}")

    def _emit_Parameter(self, param: Parameter) -> None:
        self.line(param.label if param.label is not None else "_")
        self.continue_line()
        if param.name is not None and param.name != param.label:
            self.line(" " + param.name)
            self.continue_line()
        self.line(": " + self._type(param.type))
        if param.default_value is not None:
            self.continue_line()
            self.line(" = ")
            self.continue_line()
            self._emit_expr(param.default_value)

    def _emit_signature(self, sig: FunctionSignature) -> None:
        self._emit_prefix_word(sig.access_modifier)
        self.line(self._function_kind(sig.kind) + "(")
        if len(sig.parameters) > 1:
            with self.nested():
                for param, is_last in _with_last_marker(sig.parameters):
                    self._emit_Parameter(param)
                    if not is_last:
                        self.continue_line()
                        self.line(",")
        else:
            self.continue_line()
            if sig.parameters:
                self._emit_Parameter(sig.parameters[0])
            self.continue_line()
        self.line(")")
        for keyword in sig.keywords:
            self.continue_line()
            self.line(" " + keyword)
        if sig.return_type is not None:
            self.continue_line()
            self.line(" -> ")
            self.continue_line()
            self._emit_expr(sig.return_type)

    def _emit_Function(self, decl: Function) -> None:
        self._emit_signature(decl.signature)
        if decl.body is None:
            return
        self.continue_line()
        self.line(" {")
        if decl.body:
            with self.nested():
                self._emit_code_blocks(decl.body)
        else:
            self.continue_line()
        self.line("}")

    def _emit_ConditionalCompilation(self, decl: ConditionalCompilation) -> None:
        self.line("#if " + decl.condition)
        for member, is_last in _with_last_marker(decl.declarations):
            self._emit_decl(member)
            if not is_last:
                self.line("")
        self.line("#endif")

    # ── code blocks ──────────────────────────────────────────

    def _emit_code_block(self, block: CodeBlock) -> None:
        if block.comment is not None:
            self._emit_comment(block.comment)
        if isinstance(block.item, Declaration):
            self._emit_decl(block.item)
        else:
            self._emit_expr(block.item)

    def _emit_code_blocks(self, blocks: list[CodeBlock]) -> None:
        for block in blocks:
            self._emit_code_block(block)


def render(
    declarations: list[Declaration],
    imports: list[Import] | None = None,
    top_comment: Comment | None = None,
) -> str:
    """Render file-level declarations to Swift source text."""
    file = FileDescription(
        code_blocks=[CodeBlock(decl) for decl in declarations],
        imports=list(imports or []),
        top_comment=top_comment,
    )
    return SwiftRenderer().render_file(file)


def render_expression(expr: Expression) -> str:
    """Render a single expression; multi-line results keep their newlines."""
    renderer = SwiftRenderer()
    renderer._emit_expr(expr)
    return renderer.output()


def render_declaration(decl: Declaration) -> str:
    """Render a single declaration."""
    renderer = SwiftRenderer()
    renderer._emit_decl(decl)
    return renderer.output()
