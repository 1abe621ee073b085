"""
Pipeline generator: loads a description and emits Go code for it.

Phases:
1. Parse and build the root document
2. Resolve its direct imports
3. Assign implicit enum values
4. Check that every field type is defined
5. Emit declarations in the fixed category order
6. Optionally format with gofmt
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from .analyzer.builder import load_document
from .analyzer.entities import Document
from .analyzer.enum_resolver import assign_enum_values
from .analyzer.import_resolver import ImportResolver
from .analyzer.type_resolver import TypeResolver, check_field_types
from .backends.base import EmissionContext, EmissionDispatcher
from .backends.go_backend import GoBackend
from .config import GeneratorConfig, OutputMode
from .errors import OutputExistsError
from .formatters.gofmt_formatter import GofmtFormatter
from .writer.atomic_writer import AtomicWriter

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates Go bindings for one protocol description file."""

    def __init__(self, path: Path | str, config: GeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            path: The root description file
            config: Code generation configuration
        """
        self.path = Path(path)
        self.config = config or GeneratorConfig()
        self.document: Document | None = None
        self.resolver: TypeResolver | None = None

    @property
    def proto_path(self) -> Path:
        """Directory searched for imported descriptions."""
        if self.config.proto_path:
            return Path(self.config.proto_path)
        return self.path.parent

    def load(self) -> TypeResolver:
        """
        Build, resolve and check the root document.

        Returns:
            The resolver over the fully populated document

        Raises:
            GenerationError: On the first fatal condition
        """
        document = load_document(self.path)
        ImportResolver(self.proto_path).resolve_imports(document)

        resolver = TypeResolver(document, self.config)
        assign_enum_values(document, resolver.enum_value)
        check_field_types(resolver)

        self.document = document
        self.resolver = resolver
        return resolver

    def generate(self) -> str:
        """
        Generate Go code for the description.

        Returns:
            Generated code as a string
        """
        resolver = self.resolver or self.load()

        context = EmissionContext(resolver.document, resolver, self.config)
        backend = GoBackend(self.config, self._generation_comment())
        code = EmissionDispatcher().dispatch(context, backend)

        if self.config.formatter.enabled:
            code = GofmtFormatter().format(code, self.config.formatter)

        return code

    def write(self, output: Path | str) -> None:
        """
        Generate and write the output file.

        Nothing is written when generation fails.

        Raises:
            GenerationError: On the first fatal condition
            OutputExistsError: If the file exists and the output mode forbids overwriting
        """
        output = Path(output)
        output_config = self.config.output
        if output_config.mode == OutputMode.ERROR_IF_EXISTS and output.exists():
            # Fail before doing any work
            raise OutputExistsError(str(output))

        code = self.generate()
        writer = AtomicWriter()

        if not output_config.atomic_write:
            if output_config.validate_before_write:
                writer.validate(code)
            output.write_text(code, encoding="utf-8")
            logger.info("Wrote %s", output)
        elif output_config.mode == OutputMode.FORCE:
            writer.write(output, code, output_config.validate_before_write)
        else:
            writer.write_if_not_exists(output, code, output_config.validate_before_write)

    def _generation_comment(self) -> str:
        """Generation line for the file header comment."""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__
        from ..cli_utils import reconstruct_command_line

        # Reconstruct command line using CLI utilities
        try:
            from ..xcb_to_code import xcb_to_code as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "xcb_to_code"

        timestamp = datetime.now().astimezone().strftime("%b %d, %Y at %I:%M:%S%p %Z")
        return f"Generated by xcb_to_code v{__version__} on {timestamp} : {command_line}"
