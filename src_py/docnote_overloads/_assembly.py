from __future__ import annotations

import logging
from collections.abc import Sequence

from docnote_overloads.context import RenderContext
from docnote_overloads.declarations import DocNode
from docnote_overloads.declarations import FunctionDeclaration
from docnote_overloads.exceptions import EmptyOverloadSet
from docnote_overloads.exceptions import MissingFunctionDefinition
from docnote_overloads.exceptions import MixedOverloadSet
from docnote_overloads.markup import RenderConfig
from docnote_overloads.markup import jsdoc_body_to_html
from docnote_overloads.markup import name_to_id
from docnote_overloads.outputs import FunctionDocs
from docnote_overloads.outputs import OverloadBody
from docnote_overloads.outputs import OverloadSummary
from docnote_overloads.outputs import ParamEntry
from docnote_overloads.outputs import Section
from docnote_overloads.outputs import SectionKind
from docnote_overloads.parameters import match_params
from docnote_overloads.parameters import render_params
from docnote_overloads.scoping import TypeParamScope

logger = logging.getLogger(__name__)


def render_css_for_fn(
        overload_id: str,
        *,
        deprecated: bool,
        config: RenderConfig
        ) -> str:
    """Creates the stylesheet that implements exclusive selection of
    the overload, purely in markup: the overload's selector input is
    hidden; when it's checked, every detail panel other than its own is
    hidden, and its label is highlighted.
    """
    if deprecated:
        bg_color = config.deprecated_bg_color
        border_color = config.deprecated_border_color
    else:
        bg_color = config.selected_bg_color
        border_color = config.selected_border_color

    return f'''
#{overload_id} {{
  display: none;
}}
#{overload_id}:checked ~ *:last-child > :not(#{overload_id}_div) {{
  display: none;
}}
#{overload_id}:checked ~ div:first-of-type > label[for='{overload_id}'] {{
  background-color: {bg_color};
  border: solid var(--ddoc-selection-border-width) {border_color};
  cursor: unset;
  padding: var(--ddoc-selection-padding); /* 1px less to counter the increased border */
}}
'''


def _get_function_def(doc_node: DocNode) -> FunctionDeclaration:
    if doc_node.function_def is None:
        raise MissingFunctionDefinition(
            'Function docs can only be assembled for nodes with a function '
            + 'definition!', doc_node)

    return doc_node.function_def


def assemble_overload_set(
        ctx: RenderContext,
        doc_nodes: Sequence[DocNode]
        ) -> FunctionDocs:
    """Given all of the declarations sharing a single function name (in
    declaration order), creates the docs for that function: one summary
    and one body for every documentable overload.

    The first declaration is always documented. Any later declaration
    with a body is the implementation signature for the preceding
    overloads, and is therefore skipped.
    """
    if not doc_nodes:
        raise EmptyOverloadSet('Cannot assemble docs for zero declarations!')

    name = doc_nodes[0].name
    if any(doc_node.name != name for doc_node in doc_nodes):
        raise MixedOverloadSet(
            'All declarations in an overload set must share a name!',
            tuple(doc_node.name for doc_node in doc_nodes))

    logger.debug(
        'Assembling overload set for %s (%s declarations)',
        name, len(doc_nodes))
    function_id = name_to_id('function', name)

    overloads: list[OverloadSummary] = []
    bodies: list[OverloadBody] = []
    for index, doc_node in enumerate(doc_nodes):
        function_def = _get_function_def(doc_node)
        if function_def.has_body and index != 0:
            logger.debug(
                'Skipping implementation signature of %s at index %s',
                name, index)
            continue

        deprecated_tag = doc_node.doc.deprecated_tag()
        if deprecated_tag is None:
            deprecated = None
        elif deprecated_tag.doc is None:
            deprecated = ''
        else:
            deprecated = ctx.markdown.render_summary(deprecated_tag.doc)

        overload_id = name_to_id('function', f'{name}_{index}')

        # A lone implementation has no summary separate from its full docs
        if function_def.has_body and index == 0:
            summary_doc = None
        else:
            summary_doc = jsdoc_body_to_html(ctx, doc_node.doc, summary=True)

        overloads.append(OverloadSummary(
            function_id=function_id,
            overload_id=overload_id,
            additional_css=render_css_for_fn(
                overload_id,
                deprecated=deprecated is not None,
                config=ctx.config),
            html_attrs='checked' if index == 0 else '',
            name=name,
            deprecated=deprecated,
            summary=render_function_summary(ctx, function_def),
            summary_doc=summary_doc,
            index=index))
        bodies.append(render_single_function(ctx, doc_node, overload_id))

    return FunctionDocs(tuple(overloads), tuple(bodies))


def render_function_summary(
        ctx: RenderContext,
        function_def: FunctionDeclaration
        ) -> str:
    """Renders the one-line signature, ex ``<T>(x: T): string``.
    """
    scope = TypeParamScope.for_declaration(function_def)
    if function_def.return_type is None:
        return_type = ''
    else:
        return_type = ctx.types.render_colon(scope, function_def.return_type)

    type_params = ctx.types.type_params_summary(
        scope, function_def.type_params)
    params = render_params(ctx, scope, function_def.params)
    return f'{type_params}({params}){return_type}'


def render_single_function(
        ctx: RenderContext,
        doc_node: DocNode,
        overload_id: str
        ) -> OverloadBody:
    """Creates the detail body for a single overload. Every type within
    it is rendered using a scope containing exactly the overload's own
    type params.
    """
    function_def = _get_function_def(doc_node)
    scope = TypeParamScope.for_declaration(function_def)

    params = match_params(
        ctx,
        scope,
        function_def.params,
        doc_node.doc.param_tags(),
        overload_id=overload_id,
        location=doc_node.location)

    sections: list[Section] = []
    examples = ctx.example_renderer(ctx, doc_node.doc, namespace=overload_id)
    if examples is not None:
        sections.append(examples)

    type_params = ctx.type_params_renderer(
        ctx,
        scope,
        doc_node.doc,
        function_def.type_params,
        doc_node.location,
        namespace=overload_id)
    if type_params is not None:
        sections.append(type_params)

    if params:
        sections.append(
            Section(kind=SectionKind.PARAMETERS, entries=tuple(params)))

    # Note that this is always included, even when empty. Hiding it is up
    # to the templating layer.
    return_entry = build_return_entry(ctx, scope, doc_node, overload_id)
    sections.append(Section(
        kind=SectionKind.RETURN_TYPE,
        entries=() if return_entry is None else (return_entry,)))

    return OverloadBody(
        id=f'{overload_id}_div',
        sections=tuple(sections),
        docs=jsdoc_body_to_html(ctx, doc_node.doc, summary=False))


def build_return_entry(
        ctx: RenderContext,
        scope: TypeParamScope,
        doc_node: DocNode,
        overload_id: str
        ) -> ParamEntry | None:
    """Returns None if the declaration has no return type annotation.
    We never try to infer one.
    """
    function_def = _get_function_def(doc_node)
    if function_def.return_type is None:
        return None

    return_tag = doc_node.doc.return_tag()
    if return_tag is None or return_tag.doc is None:
        return_doc = None
    else:
        return_doc = ctx.markdown.render(return_tag.doc)

    return ParamEntry(
        id=name_to_id(overload_id, 'return'),
        name='',
        type_markup=ctx.types.render(scope, function_def.return_type),
        doc=return_doc,
        location=doc_node.location)
