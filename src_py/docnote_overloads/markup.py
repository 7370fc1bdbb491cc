from __future__ import annotations

import html
import typing
from dataclasses import dataclass
from typing import Annotated
from typing import Protocol

import markdown
from docnote import Note

from docnote_overloads.declarations import DocComment
from docnote_overloads.outputs import ExampleEntry
from docnote_overloads.outputs import Section
from docnote_overloads.outputs import SectionKind

if typing.TYPE_CHECKING:
    from docnote_overloads.context import RenderContext


@dataclass(slots=True, frozen=True, kw_only=True)
class RenderConfig:
    """
    """
    markdown_extensions: Annotated[
        tuple[str, ...],
        Note('''Passed directly to python-markdown. Anything that
            ``markdown.markdown`` accepts as an extension name works.''')
        ] = ('fenced_code', 'tables')
    selected_bg_color: str = 'var(--ddoc-selection-selected-bg)'
    selected_border_color: str = 'var(--ddoc-selection-selected-border-color)'
    deprecated_bg_color: Annotated[
        str,
        Note('''Used instead of ``selected_bg_color`` to highlight the
            selector label of a deprecated overload.''')] = '#D256460C'
    deprecated_border_color: str = '#DC2626'


def html_escape(text: str) -> str:
    return html.escape(text, quote=True)


def name_to_id(namespace: str, label: str) -> str:
    """Creates a DOM- and URL-safe identifier for the label within the
    namespace. This is a pure function; identical inputs always give
    identical ids.

    ASCII alphanumerics and underscores are kept as-is. Anything else,
    including spaces, is hex-encoded between dashes (ex ``$`` becomes
    ``-24-``), so distinct labels never collapse onto the same id.
    """
    safe_chars: list[str] = []
    for char in label:
        if char == '_' or (char.isascii() and char.isalnum()):
            safe_chars.append(char)
        else:
            safe_chars.append(f'-{ord(char):x}-')

    return f'{namespace}_{"".join(safe_chars)}'


class MarkdownRendererProtocol(Protocol):

    def render(self, text: str) -> str:
        """Renders a full markdown document into an HTML fragment."""
        ...

    def render_summary(self, text: str) -> str:
        """Renders only the summary (the first paragraph) of the
        markdown document into an HTML fragment.
        """
        ...


@dataclass(slots=True, frozen=True)
class MarkdownRenderer(MarkdownRendererProtocol):
    """The default markdown renderer, backed by python-markdown. A new
    conversion is done for every call (instead of reusing a single
    ``markdown.Markdown`` instance), so this is safe to share.
    """
    config: RenderConfig = RenderConfig()

    def render(self, text: str) -> str:
        return markdown.markdown(
            text, extensions=list(self.config.markdown_extensions))

    def render_summary(self, text: str) -> str:
        return self.render(_first_block(text))


def _first_block(text: str) -> str:
    """Returns the markdown source of the first block in the text, ie
    everything up to the first blank line. Blank lines within a code
    fence don't end the block.
    """
    lines: list[str] = []
    fence: str | None = None
    for line in text.strip().splitlines():
        stripped = line.strip()
        if fence is None and not stripped:
            break

        if fence is None:
            if stripped.startswith(('```', '~~~')):
                fence = stripped[:3]
        elif stripped.startswith(fence):
            fence = None

        lines.append(line)

    return '\n'.join(lines)


def jsdoc_body_to_html(
        ctx: RenderContext,
        doc: DocComment,
        *,
        summary: bool
        ) -> str | None:
    """Renders the free-text body of the doc comment. Returns None if
    there is no body (or it's empty).
    """
    if not doc.body:
        return None

    if summary:
        return ctx.markdown.render_summary(doc.body)
    else:
        return ctx.markdown.render(doc.body)


def render_examples(
        ctx: RenderContext,
        doc: DocComment,
        *,
        namespace: Annotated[
            str,
            Note('''Example ids are created within this namespace, so that
                examples on different overloads don't collide.''')]
        ) -> Section | None:
    """Creates an ``Examples`` section out of all of the example tags
    in the doc comment, or returns None if there were none.

    If the first line of an example isn't the start of a code fence,
    it's used as the example's title.
    """
    example_tags = doc.example_tags()
    if not example_tags:
        return None

    entries: list[ExampleEntry] = []
    for index, example_tag in enumerate(example_tags):
        first_line, _, remainder = example_tag.doc.strip().partition('\n')
        if first_line and not first_line.lstrip().startswith('```'):
            title = ctx.markdown.render_summary(first_line)
            body_text = remainder
        else:
            title = None
            body_text = example_tag.doc

        entries.append(ExampleEntry(
            id=name_to_id(namespace, f'example_{index}'),
            title=title,
            body=ctx.markdown.render(body_text)))

    return Section(kind=SectionKind.EXAMPLES, entries=tuple(entries))
