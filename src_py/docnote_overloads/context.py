from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated

from docnote import Note

from docnote_overloads.markup import MarkdownRenderer
from docnote_overloads.markup import MarkdownRendererProtocol
from docnote_overloads.markup import RenderConfig
from docnote_overloads.markup import render_examples
from docnote_overloads.typerender import HtmlTypeRenderer
from docnote_overloads.typerender import TypeRendererProtocol
from docnote_overloads.typerender import render_type_params


@dataclass(slots=True, frozen=True, kw_only=True)
class RenderContext:
    """Bundles together the configuration and all of the collaborators
    needed for assembly. This is shared across every overload set in a
    document; anything overload-specific (for example, the type param
    scope) is instead passed explicitly alongside it.
    """
    config: RenderConfig
    markdown: MarkdownRendererProtocol
    types: TypeRendererProtocol
    example_renderer: Annotated[
        Callable,
        Note('''Same signature as ``markup.render_examples``. Returns an
            ``Examples`` section, or None.''')] = render_examples
    type_params_renderer: Annotated[
        Callable,
        Note('''Same signature as ``typerender.render_type_params``.
            Returns a ``Type Parameters`` section, or None.''')
        ] = render_type_params

    @classmethod
    def default(
            cls,
            *,
            config: RenderConfig | None = None,
            link_targets: Mapping[str, str] | None = None
            ) -> RenderContext:
        """Creates a render context using the bundled markdown and type
        renderers.
        """
        if config is None:
            config = RenderConfig()

        return cls(
            config=config,
            markdown=MarkdownRenderer(config),
            types=HtmlTypeRenderer(
                {} if link_targets is None else dict(link_targets)))
