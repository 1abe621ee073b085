"""
Go code generation backend.

Emits XGB declarations for every category of a resolved document using
Jinja2 templates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from ...utils import go_exported_name
from ..analyzer.entities import (
    Enum,
    Error,
    ErrorCopy,
    Event,
    EventCopy,
    ExprField,
    Field,
    Import,
    ListField,
    PadField,
    Request,
    SingleField,
    Struct,
    TypeDef,
    Union,
    ValueParamField,
    Xid,
    XidUnion,
)
from ..analyzer.expressions import (
    BinaryOp,
    Bit,
    EnumRef,
    Expression,
    FieldRef,
    PopCount,
    UnaryOp,
    Value,
)
from ..config import GeneratorConfig
from .base import EmissionContext, Emitter


class GoBackend(Emitter):
    """Go code generation backend."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    TYPE_MAP = {
        "CARD8": "byte",
        "CARD16": "uint16",
        "CARD32": "uint32",
        "CARD64": "uint64",
        "INT8": "int8",
        "INT16": "int16",
        "INT32": "int32",
        "INT64": "int64",
        "BYTE": "byte",
        "BOOL": "bool",
        "char": "byte",
        "void": "byte",
        "float": "float32",
        "double": "float64",
    }

    def __init__(self, config: GeneratorConfig, generation_comment: str = ""):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
            generation_comment: Line placed in the file header comment
        """
        self.config = config
        self.generation_comment = generation_comment
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )

    def _render(self, context: EmissionContext, name: str, **variables: Any) -> None:
        template = self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2")
        context.putlines(template.render(**variables))

    # ===--- names and types ---=== #

    def translate_type(self, type_name: str) -> str:
        """Translate an X protocol type name to a Go type."""
        if type_name in self.TYPE_MAP:
            return self.TYPE_MAP[type_name]
        return go_exported_name(type_name)

    def translate_expression(self, expr: Expression | None) -> str:
        """Render an expression as Go source."""
        match expr:
            case None:
                return ""
            case Value(value=value):
                return str(value)
            case Bit(bit=bit):
                return f"(1 << {bit})"
            case BinaryOp(op=op, left=left, right=right):
                return f"({self.translate_expression(left)} {op} {self.translate_expression(right)})"
            case UnaryOp(operand=operand):
                # Go spells bitwise complement as unary ^
                return f"^{self.translate_expression(operand)}"
            case FieldRef(name=name):
                return go_exported_name(name)
            case EnumRef(enum=enum, item=item):
                return go_exported_name(enum) + go_exported_name(item)
            case PopCount(operand=operand):
                return f"popCount(int({self.translate_expression(operand)}))"
            case _:
                return f"/* {type(expr).__name__} */"

    def _field_lines(self, fields: list[Field]) -> list[str]:
        """Go struct member lines for a field list."""
        lines: list[str] = []
        for field in fields:
            match field:
                case PadField(bytes=size):
                    lines.append(f"// padding: {size} bytes")
                case SingleField(name=name, type=type_name, enum=enum, mask=mask):
                    line = f"{go_exported_name(name)} {self.translate_type(type_name)}"
                    if enum:
                        line += f" // enum: {go_exported_name(enum)}"
                    elif mask:
                        line += f" // mask: {go_exported_name(mask)}"
                    lines.append(line)
                case ListField(name=name, type=type_name, length=length):
                    line = f"{go_exported_name(name)} []{self.translate_type(type_name)}"
                    if length is not None:
                        line += f" // length: {self.translate_expression(length)}"
                    lines.append(line)
                case ExprField(name=name, type=type_name, expression=expression):
                    lines.append(
                        f"{go_exported_name(name)} {self.translate_type(type_name)}"
                        f" // = {self.translate_expression(expression)}"
                    )
                case ValueParamField(mask_type=mask_type, mask_name=mask_name, list_name=list_name):
                    lines.append(f"{go_exported_name(mask_name)} {self.translate_type(mask_type)}")
                    lines.append(f"{go_exported_name(list_name)} []uint32")
                case _:
                    lines.append(f"// unsupported field {type(field).__name__}")
        return lines

    def fixed_size(self, context: EmissionContext, fields: list[Field], seen: frozenset[str] = frozenset()) -> int | None:
        """
        Wire size of a field list, or None when it varies or cannot be known.

        Nested structs are summed recursively; unions and lists make the
        size unknown.
        """
        total = 0
        for field in fields:
            match field:
                case PadField(bytes=size):
                    total += size
                case SingleField(type=type_name) | ExprField(type=type_name):
                    size = self._type_size(context, type_name, seen)
                    if size is None:
                        return None
                    total += size
                case _:
                    return None
        return total

    def _type_size(self, context: EmissionContext, type_name: str, seen: frozenset[str]) -> int | None:
        """
        Wire size of a field type, or None when it varies.

        The whole alias chain is walked so that unions and structs reached
        through several aliases are recognized before size_of is asked.
        """
        resolver = context.resolver
        name: str | None = type_name
        visited: set[str] = set()
        while name is not None and name not in visited:
            visited.add(name)
            if resolver.union_of(name) is not None:
                return None
            struct = resolver.struct_of(name)
            if struct is not None:
                if struct.name in seen:
                    return None
                return self.fixed_size(context, struct.fields, seen | {struct.name})
            name = resolver.type_alias(name)
        # Cycles and undefined names are reported by size_of
        return resolver.size_of(type_name)

    # ===--- categories ---=== #

    def emit_header(self, context: EmissionContext) -> None:
        document = context.document
        self._render(
            context,
            "header",
            package_name=self.config.package_name,
            header=document.header,
            generation_comment=self.generation_comment,
            extension_xname=document.extension_xname,
            extension_name=go_exported_name(document.extension_name) if document.extension_name else "",
            major_version=document.major_version,
            minor_version=document.minor_version,
        )

    def emit_imports(self, context: EmissionContext, imports: list[Import]) -> None:
        self._render(
            context,
            "imports",
            imports=[
                {
                    "name": imp.name,
                    "header": imp.document.header if imp.document is not None else imp.name,
                }
                for imp in imports
            ],
        )

    def emit_enums(self, context: EmissionContext, enums: list[Enum]) -> None:
        views = []
        for enum in enums:
            enum_name = go_exported_name(enum.name)
            items = []
            for item in enum.items:
                items.append(
                    {
                        "name": enum_name + go_exported_name(item.name),
                        "value": item.resolve_value(context.resolver.enum_value),
                    }
                )
            views.append({"xcb_name": enum.name, "items": items})
        self._render(context, "enums", enums=views)

    def emit_xids(self, context: EmissionContext, xids: list[Xid]) -> None:
        self._render(
            context,
            "xids",
            xids=[
                {
                    "kind": "Resource",
                    "xcb_name": xid.name,
                    "name": self.translate_type(xid.name),
                    "members": [],
                }
                for xid in xids
            ],
        )

    def emit_xid_unions(self, context: EmissionContext, xid_unions: list[XidUnion]) -> None:
        self._render(
            context,
            "xids",
            xids=[
                {
                    "kind": "Resource union",
                    "xcb_name": xid_union.name,
                    "name": self.translate_type(xid_union.name),
                    "members": [self.translate_type(name) for name in xid_union.types],
                }
                for xid_union in xid_unions
            ],
        )

    def emit_type_defs(self, context: EmissionContext, type_defs: list[TypeDef]) -> None:
        views = []
        for type_def in type_defs:
            size = self._type_size(context, type_def.new, frozenset())
            views.append(
                {
                    "new": self.translate_type(type_def.new),
                    "old": self.translate_type(type_def.old),
                    "size": size,
                }
            )
        self._render(context, "type_defs", type_defs=views)

    def _struct_views(self, context: EmissionContext, kind: str, declarations: list[Struct] | list[Union]) -> list[dict]:
        views = []
        for declaration in declarations:
            size = self.fixed_size(context, declaration.fields, frozenset({declaration.name}))
            views.append(
                {
                    "kind": kind,
                    "xcb_name": declaration.name,
                    "name": self.translate_type(declaration.name),
                    "size": size,
                    "fields": self._field_lines(declaration.fields),
                }
            )
        return views

    def emit_structs(self, context: EmissionContext, structs: list[Struct]) -> None:
        self._render(context, "structs", structs=self._struct_views(context, "Struct", structs))

    def emit_unions(self, context: EmissionContext, unions: list[Union]) -> None:
        # Union sizes depend on the selected member, so none is computed
        views = [
            {
                "kind": "Union",
                "xcb_name": union.name,
                "name": self.translate_type(union.name),
                "size": None,
                "fields": self._field_lines(union.fields),
            }
            for union in unions
        ]
        self._render(context, "structs", structs=views)

    def emit_requests(self, context: EmissionContext, requests: list[Request]) -> None:
        views = []
        for request in requests:
            name = go_exported_name(request.name)
            reply = None
            if request.reply is not None:
                reply = ["Sequence uint16", "Length uint32", *self._field_lines(request.reply.fields)]
            views.append(
                {
                    "xcb_name": request.name,
                    "name": name,
                    "opcode": request.opcode,
                    "combine_adjacent": request.combine_adjacent,
                    "fields": self._field_lines(request.fields),
                    "reply": reply,
                }
            )
        self._render(context, "requests", requests=views)

    def emit_errors(self, context: EmissionContext, errors: list[Error]) -> None:
        self._render(
            context,
            "errors",
            errors=[
                {
                    "xcb_name": error.name,
                    "name": go_exported_name(error.name),
                    "number": error.number,
                    "fields": ["Sequence uint16", *self._field_lines(error.fields)],
                }
                for error in errors
            ],
        )

    def emit_error_copies(self, context: EmissionContext, error_copies: list[ErrorCopy]) -> None:
        self._render(
            context,
            "copies",
            copies=[
                {
                    "kind": "Error",
                    "xcb_name": copy.name,
                    "ref": copy.ref,
                    "const_name": "Bad" + go_exported_name(copy.name),
                    "number": copy.number,
                    "type_name": go_exported_name(copy.name) + "Error",
                    "ref_type": go_exported_name(copy.ref) + "Error",
                }
                for copy in error_copies
            ],
        )

    def emit_events(self, context: EmissionContext, events: list[Event]) -> None:
        views = []
        for event in events:
            fields = self._field_lines(event.fields)
            if not event.no_sequence_number:
                fields.insert(0, "Sequence uint16")
            views.append(
                {
                    "xcb_name": event.name,
                    "name": go_exported_name(event.name),
                    "number": event.number,
                    "no_sequence_number": event.no_sequence_number,
                    "fields": fields,
                }
            )
        self._render(context, "events", events=views)

    def emit_event_copies(self, context: EmissionContext, event_copies: list[EventCopy]) -> None:
        self._render(
            context,
            "copies",
            copies=[
                {
                    "kind": "Event",
                    "xcb_name": copy.name,
                    "ref": copy.ref,
                    "const_name": go_exported_name(copy.name),
                    "number": copy.number,
                    "type_name": go_exported_name(copy.name) + "Event",
                    "ref_type": go_exported_name(copy.ref) + "Event",
                }
                for copy in event_copies
            ],
        )
