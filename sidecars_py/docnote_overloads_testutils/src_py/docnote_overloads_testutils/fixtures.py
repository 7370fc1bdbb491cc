"""Builders and fakes shared across the test suite. These keep the
individual tests focused on behavior instead of on constructing the
(fairly verbose) declaration model.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace as dc_replace

from docnote_overloads.context import RenderContext
from docnote_overloads.declarations import AssignPattern
from docnote_overloads.declarations import DeclarationKind
from docnote_overloads.declarations import DocComment
from docnote_overloads.declarations import DocNode
from docnote_overloads.declarations import DocTag
from docnote_overloads.declarations import FunctionDeclaration
from docnote_overloads.declarations import IdentifierPattern
from docnote_overloads.declarations import ObjectPattern
from docnote_overloads.declarations import Param
from docnote_overloads.declarations import SourceLocation
from docnote_overloads.declarations import TypeExpr
from docnote_overloads.declarations import TypeParamDef
from docnote_overloads.scoping import TypeParamScope
from docnote_overloads.typerender import HtmlTypeRenderer


def ident(
        name: str,
        type_expr: TypeExpr | None = None,
        *,
        optional: bool = False
        ) -> Param:
    return Param(
        pattern=IdentifierPattern(name=name, optional=optional),
        type_expr=type_expr)


def destructured(
        *properties: str,
        type_expr: TypeExpr | None = None,
        optional: bool = False
        ) -> Param:
    return Param(
        pattern=ObjectPattern(properties=properties, optional=optional),
        type_expr=type_expr)


def with_default(left: Param, right: str) -> Param:
    return Param(pattern=AssignPattern(left=left, right=right))


def fn_node(  # noqa: PLR0913
        name: str,
        *,
        params: Sequence[Param] = (),
        type_params: Sequence[TypeParamDef] = (),
        return_type: TypeExpr | None = None,
        has_body: bool = False,
        body: str | None = None,
        tags: Sequence[DocTag] = (),
        line: int = 1
        ) -> DocNode:
    return DocNode(
        name=name,
        kind=DeclarationKind.FUNCTION,
        location=SourceLocation('mod.ts', line),
        doc=DocComment(body=body, tags=tuple(tags)),
        function_def=FunctionDeclaration(
            params=tuple(params),
            type_params=tuple(type_params),
            return_type=return_type,
            has_body=has_body))


@dataclass(slots=True, frozen=True)
class RecordingTypeRenderer(HtmlTypeRenderer):
    """Behaves exactly like the default type renderer, but records the
    scope used for every call to ``render``, so that tests can verify
    which type params were visible when.
    """
    calls: list[tuple[TypeParamScope, TypeExpr]] = field(
        default_factory=list)

    def render(self, scope: TypeParamScope, type_expr: TypeExpr) -> str:
        self.calls.append((scope, type_expr))
        return super(RecordingTypeRenderer, self).render(scope, type_expr)


def make_ctx(
        *,
        link_targets: dict[str, str] | None = None,
        recorder: RecordingTypeRenderer | None = None
        ) -> RenderContext:
    ctx = RenderContext.default(link_targets=link_targets)
    if recorder is not None:
        ctx = dc_replace(ctx, types=recorder)
    return ctx
