from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from docnote import Note

from docnote_overloads.declarations import SourceLocation


class EntryTag(Enum):
    OPTIONAL = 'optional'


class SectionKind(Enum):
    EXAMPLES = 'Examples'
    TYPE_PARAMETERS = 'Type Parameters'
    PARAMETERS = 'Parameters'
    RETURN_TYPE = 'Return Type'


@dataclass(slots=True, frozen=True, kw_only=True)
class ParamEntry:
    """A single row within a parameter-like table. Used for parameters,
    type parameters, and return types.
    """
    id: str
    name: Annotated[
        str,
        Note('''Display markup for the name. Empty for return types, where
            the section title alone labels the entry.''')]
    type_markup: Annotated[
        str,
        Note('''The rendered type, including any ``= <default>`` suffix
            for params with a default value.''')]
    tags: frozenset[EntryTag] = frozenset()
    doc: Annotated[
        str | None,
        Note('The rendered markup for the matching doc tag, if any.')
        ] = None
    location: SourceLocation | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ExampleEntry:
    id: str
    title: str | None
    body: str


@dataclass(slots=True, frozen=True, kw_only=True)
class Section:
    """
    """
    kind: SectionKind
    entries: tuple[ParamEntry, ...] | tuple[ExampleEntry, ...] = ()

    @property
    def title(self) -> str:
        return self.kind.value


@dataclass(slots=True, frozen=True, kw_only=True)
class OverloadSummary:
    """Everything needed to render the selector for one overload. Pairs
    with an ``OverloadBody`` via the shared ``overload_id``.
    """
    function_id: Annotated[
        str,
        Note('Shared across all overloads of the same function.')]
    overload_id: str
    additional_css: Annotated[
        str,
        Note('''A scoped stylesheet that implements exclusive selection of
            this overload without any scripting. See
            ``_assembly.render_css_for_fn``.''')]
    html_attrs: Annotated[
        str,
        Note('''Attributes for the hidden selector input; ``checked`` for
            the overload selected by default, and empty otherwise.''')]
    name: str
    deprecated: Annotated[
        str | None,
        Note('''None if the overload isn't deprecated. Note that a
            deprecation without any explanation is an empty string, and
            not None.''')]
    summary: Annotated[
        str,
        Note('The one-line signature markup, ex ``<T>(x: T): string``.')]
    summary_doc: str | None
    index: int

    @property
    def is_default_selected(self) -> bool:
        return self.html_attrs == 'checked'


@dataclass(slots=True, frozen=True, kw_only=True)
class OverloadBody:
    """
    """
    id: str
    sections: tuple[Section, ...]
    docs: Annotated[
        str | None,
        Note('The full rendered doc comment body.')]

    def find_section(self, kind: SectionKind) -> Section | None:
        for section in self.sections:
            if section.kind is kind:
                return section

        return None


@dataclass(slots=True, frozen=True)
class FunctionDocs:
    """All of the documentation for a single function name. The two
    tuples are index-aligned.
    """
    overloads: tuple[OverloadSummary, ...]
    bodies: tuple[OverloadBody, ...]

    def __post_init__(self):
        if len(self.overloads) != len(self.bodies):
            raise ValueError(
                'Overload summaries and bodies must be index-aligned!', self)

    def pairs(self) -> Iterator[tuple[OverloadSummary, OverloadBody]]:
        yield from zip(self.overloads, self.bodies, strict=True)

    def iter_ids(self) -> Iterator[str]:
        """Yields every identifier emitted for the function, in document
        order. The function id is yielded once.
        """
        if self.overloads:
            yield self.overloads[0].function_id

        for overload, body in self.pairs():
            yield overload.overload_id
            yield body.id
            for section in body.sections:
                for entry in section.entries:
                    yield entry.id
