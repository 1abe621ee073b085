"""
Analyzer module.

Contains the entity tree, its builder, import and enum value
resolution, and the type resolution engine.
"""

from __future__ import annotations

from .builder import DocumentBuilder, load_document
from .entities import (
    Document,
    Enum,
    EnumItem,
    Error,
    ErrorCopy,
    Event,
    EventCopy,
    ExprField,
    Field,
    Import,
    ListField,
    PadField,
    Reply,
    Request,
    SingleField,
    Struct,
    TypeDef,
    Union,
    ValueParamField,
    Xid,
    XidUnion,
)
from .enum_resolver import assign_enum_values, item_values, iter_item_values
from .expressions import evaluate
from .import_resolver import ImportResolver
from .type_resolver import TypeResolver, check_field_types

__all__ = [
    "Document",
    "Import",
    "Enum",
    "EnumItem",
    "Xid",
    "XidUnion",
    "TypeDef",
    "EventCopy",
    "ErrorCopy",
    "Struct",
    "Union",
    "Request",
    "Reply",
    "Event",
    "Error",
    "Field",
    "PadField",
    "SingleField",
    "ListField",
    "ExprField",
    "ValueParamField",
    "DocumentBuilder",
    "load_document",
    "ImportResolver",
    "assign_enum_values",
    "item_values",
    "iter_item_values",
    "evaluate",
    "TypeResolver",
    "check_field_types",
]
