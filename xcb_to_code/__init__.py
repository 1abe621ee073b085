"""XCB to Code Generator

A Python package for generating Go bindings from XCB XML protocol
descriptions. Resolves imports, type aliases, resource types and
implicit enum values before emitting declarations.
"""

__version__ = "1.0.0"
__author__ = "François Lagunas"

from .pipeline import (
    AtomicWriter,
    FormatterConfig,
    GenerationError,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "GenerationError",
    "AtomicWriter",
]
