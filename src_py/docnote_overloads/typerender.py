from __future__ import annotations

import typing
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from typing import Annotated
from typing import Protocol

from docnote import Note

from docnote_overloads.declarations import ArrayType
from docnote_overloads.declarations import DocComment
from docnote_overloads.declarations import KeywordType
from docnote_overloads.declarations import LiteralType
from docnote_overloads.declarations import SourceLocation
from docnote_overloads.declarations import TupleType
from docnote_overloads.declarations import TypeExpr
from docnote_overloads.declarations import TypeParamDef
from docnote_overloads.declarations import TypeRef
from docnote_overloads.declarations import UnionType
from docnote_overloads.exceptions import UnrenderableType
from docnote_overloads.markup import html_escape
from docnote_overloads.markup import name_to_id
from docnote_overloads.outputs import ParamEntry
from docnote_overloads.outputs import Section
from docnote_overloads.outputs import SectionKind
from docnote_overloads.scoping import TypeParamScope

if typing.TYPE_CHECKING:
    from docnote_overloads.context import RenderContext


class TypeRendererProtocol(Protocol):

    def render(self, scope: TypeParamScope, type_expr: TypeExpr) -> str:
        """Renders the type expression into markup. Bare references to
        names within the scope must be treated as type variables.
        """
        ...

    def render_colon(
            self,
            scope: TypeParamScope,
            type_expr: TypeExpr
            ) -> str:
        """The same as ``render``, but prefixed by a colon, for use
        after a parameter or field name.
        """
        ...

    def type_params_summary(
            self,
            scope: TypeParamScope,
            type_params: Sequence[TypeParamDef]
            ) -> str:
        """Renders the compact ``<T extends Foo, U>`` form used within
        signature summaries. Empty if there are no type params.
        """
        ...


@dataclass(slots=True, frozen=True)
class HtmlTypeRenderer(TypeRendererProtocol):
    """The default type renderer. References to known symbols are
    turned into links; anything else is rendered as plain text.
    """
    link_targets: Annotated[
        Mapping[str, str],
        Note('''Maps the names of documented symbols to their hrefs. Names
            that shadow a type parameter in scope are **not** linked.''')
        ] = field(default_factory=dict)

    def render(self, scope: TypeParamScope, type_expr: TypeExpr) -> str:
        if isinstance(type_expr, TypeRef):
            return self._render_ref(scope, type_expr)

        if isinstance(type_expr, KeywordType):
            return f'<span>{html_escape(type_expr.keyword)}</span>'

        if isinstance(type_expr, LiteralType):
            return f'<span>{html_escape(type_expr.text)}</span>'

        if isinstance(type_expr, UnionType):
            return '<span> | </span>'.join(
                self.render(scope, member) for member in type_expr.members)

        if isinstance(type_expr, ArrayType):
            element = self.render(scope, type_expr.element)
            # Otherwise ``string | number[]`` would be ambiguous
            if isinstance(type_expr.element, UnionType):
                element = f'<span>(</span>{element}<span>)</span>'
            return f'{element}<span>[]</span>'

        if isinstance(type_expr, TupleType):
            elements = '<span>, </span>'.join(
                self.render(scope, element)
                for element in type_expr.elements)
            return f'<span>[</span>{elements}<span>]</span>'

        raise UnrenderableType('Not a known type expression!', type_expr)

    def render_colon(
            self,
            scope: TypeParamScope,
            type_expr: TypeExpr
            ) -> str:
        return f'<span>: </span>{self.render(scope, type_expr)}'

    def type_params_summary(
            self,
            scope: TypeParamScope,
            type_params: Sequence[TypeParamDef]
            ) -> str:
        if not type_params:
            return ''

        items: list[str] = []
        for type_param in type_params:
            item = f'<span>{html_escape(type_param.name)}</span>'
            if type_param.constraint is not None:
                item += (
                    '<span> extends </span>'
                    + self.render(scope, type_param.constraint))
            if type_param.default is not None:
                item += (
                    '<span> = </span>'
                    + self.render(scope, type_param.default))
            items.append(item)

        joined = '<span>, </span>'.join(items)
        return f'<span>&lt;</span>{joined}<span>&gt;</span>'

    def _render_ref(self, scope: TypeParamScope, type_ref: TypeRef) -> str:
        escaped_name = html_escape(type_ref.name)
        if type_ref.name in scope:
            rendered = f'<span class="type-param">{escaped_name}</span>'
        elif (href := self.link_targets.get(type_ref.name)) is not None:
            rendered = (
                f'<a href="{html_escape(href)}" class="link">'
                + f'{escaped_name}</a>')
        else:
            rendered = f'<span>{escaped_name}</span>'

        if type_ref.type_args:
            type_args = '<span>, </span>'.join(
                self.render(scope, type_arg)
                for type_arg in type_ref.type_args)
            rendered += f'<span>&lt;</span>{type_args}<span>&gt;</span>'

        return rendered


def render_type_params(
        ctx: RenderContext,
        scope: TypeParamScope,
        doc: DocComment,
        type_params: Sequence[TypeParamDef],
        location: SourceLocation,
        *,
        namespace: str
        ) -> Section | None:
    """Creates a ``Type Parameters`` section, with one entry per type
    param, merging in descriptions from any ``@template`` tags. Returns
    None if there are no type params.
    """
    if not type_params:
        return None

    template_tags = doc.template_tags()
    entries: list[ParamEntry] = []
    for type_param in type_params:
        type_markup = ''
        if type_param.constraint is not None:
            type_markup += (
                '<span><span class="font-normal"> extends </span>'
                + f'{ctx.types.render(scope, type_param.constraint)}</span>')
        if type_param.default is not None:
            type_markup += (
                '<span><span class="font-normal"> = </span>'
                + f'{ctx.types.render(scope, type_param.default)}</span>')

        template_tag = template_tags.get(type_param.name)
        if template_tag is None or template_tag.doc is None:
            type_param_doc = None
        else:
            type_param_doc = ctx.markdown.render(template_tag.doc)

        entries.append(ParamEntry(
            id=name_to_id(namespace, f'type_params_{type_param.name}'),
            name=html_escape(type_param.name),
            type_markup=type_markup,
            doc=type_param_doc,
            location=location))

    return Section(kind=SectionKind.TYPE_PARAMETERS, entries=tuple(entries))
