from __future__ import annotations

import logging
import typing
from collections.abc import Mapping
from collections.abc import Sequence

from docnote_overloads.declarations import ArrayPattern
from docnote_overloads.declarations import AssignPattern
from docnote_overloads.declarations import IdentifierPattern
from docnote_overloads.declarations import ObjectPattern
from docnote_overloads.declarations import Param
from docnote_overloads.declarations import ParamTag
from docnote_overloads.declarations import RestPattern
from docnote_overloads.declarations import SourceLocation
from docnote_overloads.declarations import unwrap_assign
from docnote_overloads.markup import html_escape
from docnote_overloads.markup import name_to_id
from docnote_overloads.outputs import EntryTag
from docnote_overloads.outputs import ParamEntry
from docnote_overloads.scoping import TypeParamScope

if typing.TYPE_CHECKING:
    from docnote_overloads.context import RenderContext

logger = logging.getLogger(__name__)

# Beyond this many params, the summary puts each one on its own line
_INLINE_PARAMS_LIMIT = 3


def param_name(param: Param, index: int) -> tuple[str, str]:
    """Returns a tuple of ``(display_markup, raw_label)`` for the param.
    The raw label is used both for doc tag lookup and for the fragment
    of the param's id.

    Destructured params have no single bound name, so they get a
    placeholder based on their position instead.
    """
    pattern = param.pattern
    if isinstance(pattern, IdentifierPattern):
        return html_escape(pattern.name), pattern.name

    if isinstance(pattern, ArrayPattern | ObjectPattern):
        label = f'unnamed {index}'
        return f'<i>{label}</i>', label

    if isinstance(pattern, AssignPattern):
        return param_name(pattern.left, index)

    if isinstance(pattern, RestPattern):
        display_name, label = param_name(pattern.arg, index)
        return f'<span>...</span>{display_name}', f'...{label}'

    raise TypeError('Impossible branch: unknown param pattern!', param)


def is_pattern_optional(param: Param) -> bool:
    """Returns True if the param's own pattern is marked optional (ex
    ``x?: number``). This **doesn't** consider defaults.
    """
    pattern = param.pattern
    if isinstance(pattern, IdentifierPattern | ArrayPattern | ObjectPattern):
        return pattern.optional

    return False


def _resolve_default(
        param: Param,
        param_tag: ParamTag | None
        ) -> tuple[Param, str | None]:
    bindable, literal_default = unwrap_assign(param)
    # A default written in the signature is the ground truth. The doc tag
    # is only a fallback.
    if literal_default is not None:
        return bindable, literal_default
    if param_tag is not None:
        return bindable, param_tag.default

    return bindable, None


def match_params(
        ctx: RenderContext,
        scope: TypeParamScope,
        params: Sequence[Param],
        param_tags: Mapping[str, ParamTag],
        *,
        overload_id: str,
        location: SourceLocation | None = None
        ) -> list[ParamEntry]:
    """Merges the positional params of a single declaration with the
    ``@param`` tags from its doc comment, returning one entry per param
    (in signature order).

    All types are rendered within the passed scope, which must belong
    to the same declaration as the params.
    """
    entries: list[ParamEntry] = []
    matched_labels: set[str] = set()

    for index, param in enumerate(params):
        display_name, label = param_name(param, index)
        # Rest params are documented by their bare name, ie ``@param args``
        tag_name = label.removeprefix('...')
        param_tag = param_tags.get(tag_name)
        if param_tag is not None:
            matched_labels.add(tag_name)

        bindable, default = _resolve_default(param, param_tag)

        if bindable.type_expr is None:
            type_markup = ''
        else:
            type_markup = ctx.types.render_colon(scope, bindable.type_expr)

        if default is not None:
            type_markup += (
                '<span><span class="font-normal"> = </span>'
                + f'{html_escape(default)}</span>')

        if (
            is_pattern_optional(param)
            or default is not None
            or (param_tag is not None and param_tag.optional)
        ):
            tags = frozenset({EntryTag.OPTIONAL})
        else:
            tags = frozenset()

        if param_tag is None or param_tag.doc is None:
            doc = None
        else:
            doc = ctx.markdown.render(param_tag.doc)

        entries.append(ParamEntry(
            id=name_to_id(overload_id, f'parameters_{label}'),
            name=display_name,
            type_markup=type_markup,
            tags=tags,
            doc=doc,
            location=location))

    for unmatched in sorted(param_tags.keys() - matched_labels):
        logger.info(
            'Doc comment for %s documents a param (%s) that is not in its '
            + 'signature.', overload_id, unmatched)

    return entries


def render_params(
        ctx: RenderContext,
        scope: TypeParamScope,
        params: Sequence[Param]
        ) -> str:
    """Renders the parameter list for use within a signature summary
    (ie, everything between the parentheses).
    """
    if not params:
        return ''

    rendered = [
        _render_summary_param(ctx, scope, param, index)
        for index, param in enumerate(params)]

    if len(rendered) <= _INLINE_PARAMS_LIMIT:
        return '<span>, </span>'.join(rendered)

    lines = ''.join(f'<div>{param},</div>' for param in rendered)
    return f'<div class="ml-4">{lines}</div>'


def _render_summary_param(
        ctx: RenderContext,
        scope: TypeParamScope,
        param: Param,
        index: int
        ) -> str:
    display_name, _ = param_name(param, index)
    bindable, literal_default = unwrap_assign(param)

    if bindable.type_expr is None:
        type_markup = ''
    else:
        type_markup = ctx.types.render_colon(scope, bindable.type_expr)

    if is_pattern_optional(param) or literal_default is not None:
        question_mark = '?'
    else:
        question_mark = ''

    return f'<span>{display_name}{question_mark}{type_markup}</span>'
