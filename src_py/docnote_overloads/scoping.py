from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated

from docnote import Note

from docnote_overloads.declarations import FunctionDeclaration
from docnote_overloads.declarations import TypeParamDef


@dataclass(slots=True, frozen=True)
class TypeParamScope:
    """The set of generic type parameter names visible while rendering
    the types of a single overload. Type renderers treat a bare
    reference to one of these names as a type variable (and render it
    verbatim) instead of trying to link it to a documented symbol.

    Scopes are values. They're passed explicitly into every rendering
    call, and a fresh one is created for every overload, so nothing
    declared on one overload can leak into a sibling.
    """
    names: Annotated[
        frozenset[str],
        Note('The names of all type parameters currently in scope.')
        ] = frozenset()

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def extend(self, names: Iterable[str]) -> TypeParamScope:
        """Returns a new scope that additionally includes the passed
        names. The current scope is left unchanged.
        """
        return TypeParamScope(self.names | frozenset(names))

    @classmethod
    def from_type_params(
            cls,
            type_params: Iterable[TypeParamDef]
            ) -> TypeParamScope:
        return cls(frozenset(type_param.name for type_param in type_params))

    @classmethod
    def for_declaration(
            cls,
            function_def: FunctionDeclaration
            ) -> TypeParamScope:
        return cls.from_type_params(function_def.type_params)


EMPTY_SCOPE = TypeParamScope()
