from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Annotated
from typing import Any

from docnote import Note


class DeclarationKind(Enum):
    FUNCTION = 'function'
    CLASS = 'class'
    INTERFACE = 'interface'
    TYPE_ALIAS = 'typeAlias'
    ENUM = 'enum'
    VARIABLE = 'variable'
    NAMESPACE = 'namespace'


@dataclass(slots=True, frozen=True)
class SourceLocation:
    """Where a declaration was found. This is never interpreted here;
    it's simply handed on to the output entries, so that templating
    layers can turn it into a source link.
    """
    filename: str
    line: int
    col: int = 0


@dataclass(slots=True, frozen=True)
class TypeRef:
    """A named reference to some other type, ex ``Promise<T>``. If the
    name matches a generic parameter currently in scope, it refers to
    that type variable instead of a documented symbol.
    """
    name: str
    type_args: tuple[TypeExpr, ...] = ()


@dataclass(slots=True, frozen=True)
class KeywordType:
    keyword: Annotated[
        str,
        Note('Ex ``string``, ``number``, ``void``, ``unknown``.')]


@dataclass(slots=True, frozen=True)
class LiteralType:
    text: Annotated[
        str,
        Note('''The literal exactly as written in source, including any
            quotes, ex ``"foo"`` or ``42``.''')]


@dataclass(slots=True, frozen=True)
class UnionType:
    members: tuple[TypeExpr, ...]


@dataclass(slots=True, frozen=True)
class ArrayType:
    element: TypeExpr


@dataclass(slots=True, frozen=True)
class TupleType:
    elements: tuple[TypeExpr, ...]


type TypeExpr = (
    TypeRef
    | KeywordType
    | LiteralType
    | UnionType
    | ArrayType
    | TupleType)


@dataclass(slots=True, frozen=True, kw_only=True)
class TypeParamDef:
    """A single generic type parameter declared on a function, ex the
    ``T`` in ``function foo<T extends string = "a">()``.
    """
    name: str
    constraint: TypeExpr | None = None
    default: TypeExpr | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class IdentifierPattern:
    name: str
    optional: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class ArrayPattern:
    """A destructured array parameter, ex ``[a, b]``. Note that this has
    no single bound name.
    """
    elements: tuple[Param | None, ...] = ()
    optional: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class ObjectPattern:
    """A destructured object parameter, ex ``{ a, b }``. Note that this
    has no single bound name.
    """
    properties: tuple[str, ...] = ()
    optional: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class AssignPattern:
    """A parameter with a default value in the signature itself, ex
    ``{ a, b } = {}``.
    """
    left: Annotated[
        Param,
        Note('''The bindable pattern being assigned to. Any declared type
            for the parameter lives here, and not on the outer ``Param``.
            ''')]
    right: Annotated[
        str,
        Note('The source text of the default expression.')]


@dataclass(slots=True, frozen=True, kw_only=True)
class RestPattern:
    arg: Param


type ParamPattern = (
    IdentifierPattern
    | ArrayPattern
    | ObjectPattern
    | AssignPattern
    | RestPattern)


@dataclass(slots=True, frozen=True, kw_only=True)
class Param:
    """
    """
    pattern: ParamPattern
    type_expr: Annotated[
        TypeExpr | None,
        Note('''Always None for ``AssignPattern``s; the type is instead
            declared on ``pattern.left``.''')] = None


def unwrap_assign(param: Param) -> tuple[Param, str | None]:
    """Strips any ``AssignPattern`` wrapping from the param, returning
    the underlying bindable param (which carries the declared type)
    along with the literal default from the signature, if any.
    """
    if isinstance(param.pattern, AssignPattern):
        inner, _ = unwrap_assign(param.pattern.left)
        return inner, param.pattern.right

    return param, None


@dataclass(slots=True, frozen=True, kw_only=True)
class ParamTag:
    name: str
    doc: str | None = None
    optional: bool = False
    default: Annotated[
        str | None,
        Note('''A default value as described by the doc comment, ex
            ``@param [verbose=true]``. This is only used if the signature
            itself doesn't declare a literal default.''')] = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ReturnTag:
    doc: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class DeprecatedTag:
    doc: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ExampleTag:
    doc: str


@dataclass(slots=True, frozen=True, kw_only=True)
class TemplateTag:
    """Describes one of the generic type parameters, ex
    ``@template T the item type``.
    """
    name: str
    doc: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class UnsupportedTag:
    """Any other tag kind. These are retained so that doc comments can
    round-trip, but they're ignored for function docs.
    """
    kind: str
    value: Any = None


type DocTag = (
    ParamTag
    | ReturnTag
    | DeprecatedTag
    | ExampleTag
    | TemplateTag
    | UnsupportedTag)


@dataclass(slots=True, frozen=True, kw_only=True)
class DocComment:
    """
    """
    body: str | None = None
    tags: tuple[DocTag, ...] = ()

    def param_tags(self) -> dict[str, ParamTag]:
        """Returns all of the ``ParamTag``s, keyed by parameter name. If
        a name is (erroneously) documented twice, the first one wins.
        """
        param_tags: dict[str, ParamTag] = {}
        for tag in self.tags:
            if isinstance(tag, ParamTag):
                param_tags.setdefault(tag.name, tag)

        return param_tags

    def template_tags(self) -> dict[str, TemplateTag]:
        template_tags: dict[str, TemplateTag] = {}
        for tag in self.tags:
            if isinstance(tag, TemplateTag):
                template_tags.setdefault(tag.name, tag)

        return template_tags

    def return_tag(self) -> ReturnTag | None:
        for tag in self.tags:
            if isinstance(tag, ReturnTag):
                return tag

        return None

    def deprecated_tag(self) -> DeprecatedTag | None:
        for tag in self.tags:
            if isinstance(tag, DeprecatedTag):
                return tag

        return None

    def example_tags(self) -> tuple[ExampleTag, ...]:
        return tuple(tag for tag in self.tags if isinstance(tag, ExampleTag))


@dataclass(slots=True, frozen=True, kw_only=True)
class FunctionDeclaration:
    """The function-specific part of a declaration. Overloads and the
    implementation signature each get their own instance.
    """
    params: tuple[Param, ...] = ()
    type_params: tuple[TypeParamDef, ...] = ()
    return_type: Annotated[
        TypeExpr | None,
        Note('''None means that no return type was **declared**. It is never
            inferred.''')] = None
    has_body: Annotated[
        bool,
        Note('''True for the implementation signature, ie the one with
            executable code, as opposed to a type-only overload.''')
        ] = False


@dataclass(slots=True, frozen=True, kw_only=True)
class DocNode:
    """A single parsed declaration, along with its doc comment. These
    are assumed to have been validated already by the parser; in
    particular, any node of ``DeclarationKind.FUNCTION`` must have a
    ``function_def``.
    """
    name: str
    kind: DeclarationKind
    location: SourceLocation
    doc: DocComment = field(default_factory=DocComment)
    function_def: FunctionDeclaration | None = None
