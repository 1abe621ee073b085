"""
Entity tree definitions.

These nodes represent one protocol description document after it has
been built from the element tree. Declaration order is preserved in
every collection, since it drives the layout of the generated file.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .expressions import Expression, evaluate

# ===--- Fields ---=== #


@dataclass
class Field:
    """Base class for all fields of a struct, union, request, reply, event or error."""

    def type_names(self) -> list[str]:
        """Names of all types this field refers to."""
        return []


@dataclass
class PadField(Field):
    """<pad bytes="N"/>"""

    bytes: int = 0


@dataclass
class SingleField(Field):
    """<field type="T" name="n"/>"""

    name: str = ""
    type: str = ""
    enum: str | None = None
    mask: str | None = None

    def type_names(self) -> list[str]:
        return [self.type]


@dataclass
class ListField(Field):
    """<list type="T" name="n">length expression</list>"""

    name: str = ""
    type: str = ""
    length: Expression | None = None

    def type_names(self) -> list[str]:
        return [self.type]


@dataclass
class ExprField(Field):
    """<exprfield type="T" name="n">expression</exprfield>"""

    name: str = ""
    type: str = ""
    expression: Expression | None = None

    def type_names(self) -> list[str]:
        return [self.type]


@dataclass
class ValueParamField(Field):
    """<valueparam value-mask-type= value-mask-name= value-list-name=/>"""

    mask_type: str = ""
    mask_name: str = ""
    list_name: str = ""

    def type_names(self) -> list[str]:
        return [self.mask_type]


# ===--- Declarations ---=== #


@dataclass
class Import:
    """Reference to another description document."""

    name: str = ""
    # Bound by the import resolver
    document: Document | None = None


@dataclass
class EnumItem:
    name: str = ""
    # None until the enum value resolver assigns the implicit value
    expression: Expression | None = None

    @property
    def value(self) -> int | None:
        """Value of a literal expression. Items using <enumref> need resolve_value."""
        return self.resolve_value()

    def resolve_value(self, enum_values: Callable[[str, str], int] | None = None) -> int | None:
        """
        Value of the item, looking up <enumref> operands through 'enum_values'.

        Raises:
            ExpressionUnsupportedError: If an <enumref> is met without a lookup
        """
        if self.expression is None:
            return None
        return evaluate(self.expression, enum_values=enum_values)


@dataclass
class Enum:
    name: str = ""
    items: list[EnumItem] = field(default_factory=list)


@dataclass
class Xid:
    """A resource (XID) type."""

    name: str = ""


@dataclass
class XidUnion:
    """A resource type that may hold any of several resource kinds."""

    name: str = ""
    types: list[str] = field(default_factory=list)


@dataclass
class TypeDef:
    """A one-hop rename: new is an alias of old."""

    old: str = ""
    new: str = ""


@dataclass
class EventCopy:
    """A new event name and number reusing another event's layout."""

    name: str = ""
    number: int = 0
    ref: str = ""


@dataclass
class ErrorCopy:
    """A new error name and number reusing another error's layout."""

    name: str = ""
    number: int = 0
    ref: str = ""


@dataclass
class Struct:
    name: str = ""
    fields: list[Field] = field(default_factory=list)


@dataclass
class Union:
    name: str = ""
    fields: list[Field] = field(default_factory=list)


@dataclass
class Reply:
    fields: list[Field] = field(default_factory=list)


@dataclass
class Request:
    name: str = ""
    opcode: int = 0
    combine_adjacent: bool = False
    fields: list[Field] = field(default_factory=list)
    reply: Reply | None = None


@dataclass
class Event:
    name: str = ""
    number: int = 0
    no_sequence_number: bool = False
    fields: list[Field] = field(default_factory=list)


@dataclass
class Error:
    name: str = ""
    number: int = 0
    fields: list[Field] = field(default_factory=list)


@dataclass
class Document:
    """One resolved protocol description file."""

    header: str = ""
    extension_xname: str = ""
    extension_name: str = ""
    major_version: str = ""
    minor_version: str = ""

    imports: list[Import] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    xids: list[Xid] = field(default_factory=list)
    xid_unions: list[XidUnion] = field(default_factory=list)
    type_defs: list[TypeDef] = field(default_factory=list)
    event_copies: list[EventCopy] = field(default_factory=list)
    error_copies: list[ErrorCopy] = field(default_factory=list)

    # Declarations with structure contents
    structs: list[Struct] = field(default_factory=list)
    unions: list[Union] = field(default_factory=list)
    requests: list[Request] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    errors: list[Error] = field(default_factory=list)

    # File the document was built from
    source_path: str = ""

    def imported_documents(self) -> list[Document]:
        """Documents bound to this document's imports, in declaration order."""
        return [imp.document for imp in self.imports if imp.document is not None]

    def field_owners(self) -> list[tuple[str, list[Field]]]:
        """(owner name, fields) for every declaration that carries fields."""
        owners: list[tuple[str, list[Field]]] = []
        for struct in self.structs:
            owners.append((struct.name, struct.fields))
        for union in self.unions:
            owners.append((union.name, union.fields))
        for request in self.requests:
            owners.append((request.name, request.fields))
            if request.reply is not None:
                owners.append((f"{request.name} reply", request.reply.fields))
        for event in self.events:
            owners.append((event.name, event.fields))
        for error in self.errors:
            owners.append((error.name, error.fields))
        return owners
