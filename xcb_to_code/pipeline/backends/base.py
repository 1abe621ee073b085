"""
Emission context, emitter interface and dispatcher.

The dispatcher owns the order in which declaration categories appear in
the generated file; emitters only turn one category into text.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..analyzer.entities import (
    Document,
    Enum,
    Error,
    ErrorCopy,
    Event,
    EventCopy,
    Import,
    Request,
    Struct,
    TypeDef,
    Union,
    Xid,
    XidUnion,
)
from ..analyzer.type_resolver import TypeResolver
from ..config import GeneratorConfig

logger = logging.getLogger(__name__)


class EmissionContext:
    """Shared state handed to every emitter of one generation run."""

    def __init__(self, document: Document, resolver: TypeResolver, config: GeneratorConfig):
        """
        Initialize the context.

        Args:
            document: The fully resolved document being generated
            resolver: Type queries over the document and its imports
            config: Code generation configuration
        """
        self.document = document
        self.resolver = resolver
        self.config = config
        self.lines: list[str] = []

    def putln(self, fmt: str, *args: Any) -> None:
        """Append one output line, %-formatting it when arguments are given."""
        self.lines.append(fmt % args if args else fmt)

    def putlines(self, text: str) -> None:
        """Append every line of a rendered block."""
        for line in text.splitlines():
            self.putln(line)

    def output(self) -> str:
        """The generated text so far."""
        return "\n".join(self.lines) + "\n"


class Emitter(ABC):
    """Abstract base class for category emitters.

    One method per declaration category. Emitters write through
    context.putln and may query context.resolver, but must not resolve
    imports or enum values again.
    """

    def emit_header(self, context: EmissionContext) -> None:
        """Emit anything that precedes the declarations."""

    @abstractmethod
    def emit_imports(self, context: EmissionContext, imports: list[Import]) -> None:
        """Emit the import declarations."""

    @abstractmethod
    def emit_enums(self, context: EmissionContext, enums: list[Enum]) -> None:
        """Emit enums; every item already has a value."""

    @abstractmethod
    def emit_xids(self, context: EmissionContext, xids: list[Xid]) -> None:
        """Emit resource types."""

    @abstractmethod
    def emit_xid_unions(self, context: EmissionContext, xid_unions: list[XidUnion]) -> None:
        """Emit resource union types."""

    @abstractmethod
    def emit_type_defs(self, context: EmissionContext, type_defs: list[TypeDef]) -> None:
        """Emit type aliases."""

    @abstractmethod
    def emit_structs(self, context: EmissionContext, structs: list[Struct]) -> None:
        """Emit structs."""

    @abstractmethod
    def emit_unions(self, context: EmissionContext, unions: list[Union]) -> None:
        """Emit unions."""

    @abstractmethod
    def emit_requests(self, context: EmissionContext, requests: list[Request]) -> None:
        """Emit requests and their replies."""

    @abstractmethod
    def emit_errors(self, context: EmissionContext, errors: list[Error]) -> None:
        """Emit errors."""

    @abstractmethod
    def emit_error_copies(self, context: EmissionContext, error_copies: list[ErrorCopy]) -> None:
        """Emit error aliases."""

    @abstractmethod
    def emit_events(self, context: EmissionContext, events: list[Event]) -> None:
        """Emit events."""

    @abstractmethod
    def emit_event_copies(self, context: EmissionContext, event_copies: list[EventCopy]) -> None:
        """Emit event aliases."""


class EmissionDispatcher:
    """Walks the declaration categories of a document in a fixed order."""

    # Document attribute holding each category, in emission order
    CATEGORY_ORDER: tuple[str, ...] = (
        "imports",
        "enums",
        "xids",
        "xid_unions",
        "type_defs",
        "structs",
        "unions",
        "requests",
        "errors",
        "error_copies",
        "events",
        "event_copies",
    )

    def dispatch(self, context: EmissionContext, emitter: Emitter) -> str:
        """
        Emit the whole document.

        Each category is handed to emitter.emit_<category> and followed
        by one blank line.

        Returns:
            The generated text
        """
        emitter.emit_header(context)
        context.putln("")

        for category in self.CATEGORY_ORDER:
            entities = getattr(context.document, category)
            getattr(emitter, f"emit_{category}")(context, entities)
            context.putln("")
            logger.debug("Emitted %d %s", len(entities), category)

        return context.output()
