"""
Pipeline - XCB protocol description to Go code generator.

This module provides a multi-phase architecture for generating code
from XML protocol descriptions:

1. Phase 1 (Parser): Parse the XML into a description AST
2. Phase 2 (Builder): Build the entity tree of one document
3. Phase 3 (Resolver): Attach imported documents, assign enum values
4. Phase 4 (Analyzer): Type queries and the field type check
5. Phase 5 (Backend): Emit declarations category by category
6. Phase 6 (Formatter): Optional post-processing with gofmt
"""

from __future__ import annotations

from .config import FormatterConfig, GeneratorConfig, OutputConfig, OutputMode
from .errors import (
    AliasCycleError,
    DescriptionMalformedError,
    DescriptionNotFoundError,
    ExpressionUnsupportedError,
    GenerationError,
    ImportMalformedError,
    ImportNotFoundError,
    OutputExistsError,
    OutputValidationError,
    TypeUndefinedError,
)
from .generator import PipelineGenerator
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "GenerationError",
    "DescriptionNotFoundError",
    "DescriptionMalformedError",
    "ImportNotFoundError",
    "ImportMalformedError",
    "TypeUndefinedError",
    "AliasCycleError",
    "ExpressionUnsupportedError",
    "OutputExistsError",
    "OutputValidationError",
]
