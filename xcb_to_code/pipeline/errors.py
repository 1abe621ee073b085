"""
Error taxonomy for the generator pipeline.

Every fatal condition of a generation run is a subclass of GenerationError.
Library code only raises; the CLI turns the first error into a failed exit.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all fatal generation errors."""

    pass


class DescriptionNotFoundError(GenerationError):
    """Raised when a description file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read protocol description '{path}': {reason}")
        self.path = path
        self.reason = reason


class DescriptionMalformedError(GenerationError):
    """Raised when a description file cannot be parsed or built.

    This can happen when:
    - The XML itself is not well formed
    - The root element is not <xcb>
    - A declaration misses a required attribute
    - An integer or boolean attribute has an invalid value
    """

    def __init__(self, message: str, source_path: str = ""):
        if source_path:
            message = f"{source_path}: {message}"
        super().__init__(message)
        self.source_path = source_path


class ImportNotFoundError(DescriptionNotFoundError):
    """Raised when the description file of an import cannot be read."""

    def __init__(self, import_name: str, path: str, reason: str):
        GenerationError.__init__(
            self,
            f"Could not read X protocol description for import '{import_name}' ({path}) because: {reason}",
        )
        self.import_name = import_name
        self.path = path
        self.reason = reason


class ImportMalformedError(DescriptionMalformedError):
    """Raised when the description file of an import cannot be parsed or built."""

    def __init__(self, import_name: str, path: str, reason: str):
        GenerationError.__init__(
            self,
            f"Could not parse X protocol description for import '{import_name}' ({path}) because: {reason}",
        )
        self.import_name = import_name
        self.source_path = path
        self.reason = reason


class TypeUndefinedError(GenerationError):
    """Raised when a type name cannot be resolved to a wire representation."""

    def __init__(self, type_name: str, message: str | None = None):
        super().__init__(message or f"Could not find base size of type '{type_name}'.")
        self.type_name = type_name


class AliasCycleError(GenerationError):
    """Raised when following type aliases revisits a type name."""

    def __init__(self, cycle: list[str]):
        super().__init__(f"Cyclic type alias: {' -> '.join(cycle)}")
        self.cycle = cycle


class ExpressionUnsupportedError(GenerationError):
    """Raised when an expression cannot be evaluated to a constant."""

    pass


class OutputExistsError(GenerationError):
    """Raised when the output file exists and overwriting was not requested."""

    def __init__(self, path: str):
        super().__init__(f"Output file already exists: {path}. Use --force to overwrite.")
        self.path = path


class OutputValidationError(GenerationError):
    """Raised when generated Go code fails the pre-write sanity checks."""

    pass
