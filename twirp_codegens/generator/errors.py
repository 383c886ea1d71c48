"""Errors raised while generating decorators."""


class GenerationError(RuntimeError):
    """Raised when a generation request cannot be completed.

    Every subclass is fatal to the whole request: no files are emitted.
    """


class UnresolvedTypeError(GenerationError):
    """Raised when a type reference has no registered definition."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unresolved type reference: {name}")
        self.name = name


class DuplicateDefinitionError(GenerationError):
    """Raised when two definitions share a qualified name."""


class UnknownFileError(GenerationError):
    """Raised when a file to generate is missing from the request."""


class OptionsError(GenerationError):
    """Raised when the plugin parameter string is malformed."""
