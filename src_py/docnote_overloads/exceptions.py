class MissingFunctionDefinition(TypeError):
    """Raised when a node handed to the function assembler has no
    function definition. This indicates a parser bug (or a caller
    passing non-function nodes), and isn't recoverable.
    """


class EmptyOverloadSet(ValueError):
    """Raised when attempting to assemble docs for zero declarations.
    """


class MixedOverloadSet(ValueError):
    """Raised when the declarations in a single overload set don't all
    share the same name.
    """


class DuplicateIdentifier(LookupError):
    """Raised when the same identifier would be emitted twice within a
    single document.
    """


class UnrenderableType(TypeError):
    """Raised by the type renderer when it encounters something that
    isn't a known type expression.
    """
