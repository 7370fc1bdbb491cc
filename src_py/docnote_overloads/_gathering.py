from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Annotated

from docnote import Note

from docnote_overloads._assembly import assemble_overload_set
from docnote_overloads.context import RenderContext
from docnote_overloads.declarations import DeclarationKind
from docnote_overloads.declarations import DocNode
from docnote_overloads.exceptions import DuplicateIdentifier
from docnote_overloads.outputs import FunctionDocs

logger = logging.getLogger(__name__)


def group_overload_sets(
        doc_nodes: Iterable[DocNode]
        ) -> dict[str, list[DocNode]]:
    """Groups all function nodes by name. Groups are ordered by the
    first appearance of their name, and the nodes within each group
    keep their declaration order (which determines overload indices).
    """
    groups: dict[str, list[DocNode]] = {}
    for doc_node in doc_nodes:
        if doc_node.kind is not DeclarationKind.FUNCTION:
            logger.debug(
                'Skipping non-function node %s (%s)',
                doc_node.name, doc_node.kind)
            continue

        groups.setdefault(doc_node.name, []).append(doc_node)

    return groups


def gather_function_docs(
        doc_nodes: Annotated[
            Iterable[DocNode],
            Note('''All of the nodes for a single document, in declaration
                order. Non-function nodes are ignored.''')],
        *,
        ctx: Annotated[
            RenderContext | None,
            Note('''If omitted, a default context (with the bundled
                markdown and type renderers) is used.''')] = None
        ) -> dict[str, FunctionDocs]:
    """Assembles the function docs for every overload set within a
    document, returning them keyed by function name.

    This is all-or-nothing: any failure while assembling any of the
    overload sets propagates, and nothing is returned. Identifiers must
    be unique across the whole document; if any would be emitted twice,
    raises ``DuplicateIdentifier``.
    """
    if ctx is None:
        ctx = RenderContext.default()

    function_docs: dict[str, FunctionDocs] = {}
    seen_ids: dict[str, str] = {}
    for name, overload_set in group_overload_sets(doc_nodes).items():
        docs = assemble_overload_set(ctx, overload_set)

        for id_ in docs.iter_ids():
            if id_ in seen_ids:
                raise DuplicateIdentifier(
                    'Identifier emitted twice within the same document!',
                    id_, seen_ids[id_], name)
            seen_ids[id_] = name

        function_docs[name] = docs

    return function_docs
