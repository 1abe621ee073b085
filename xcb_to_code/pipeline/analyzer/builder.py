"""
Document builder that turns an element tree into the entity tree.

Phase 2 of loading: interpret each element as a declaration, validating
required attributes as the entities are constructed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..description_ast.nodes import DescriptionAST, ElementNode
from ..description_ast.parser import DescriptionParser
from ..errors import DescriptionMalformedError, ExpressionUnsupportedError
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
from .expressions import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    BinaryOp,
    Bit,
    EnumRef,
    Expression,
    FieldRef,
    PopCount,
    UnaryOp,
    Value,
)

logger = logging.getLogger(__name__)

# Documentation elements carry no declarations
IGNORED_TAGS = {"doc"}


class DocumentBuilder:
    """Builds a Document from a parsed description."""

    ROOT_TAG = "xcb"

    def __init__(self):
        self.source_path = ""

    def build(self, ast: DescriptionAST) -> Document:
        """
        Build the entity tree of one description.

        Args:
            ast: The parsed description

        Returns:
            Document with unresolved imports and unassigned enum values

        Raises:
            DescriptionMalformedError: If a declaration is invalid
            ExpressionUnsupportedError: If an expression element is unknown
        """
        self.source_path = ast.source_path
        root = ast.root
        if root is None or root.tag != self.ROOT_TAG:
            found = root.tag if root is not None else "nothing"
            raise DescriptionMalformedError(f"Expected <{self.ROOT_TAG}> root element, found <{found}>", self.source_path)

        document = Document(
            header=self._required(root, "header"),
            extension_xname=root.get("extension-xname", ""),
            extension_name=root.get("extension-name", ""),
            major_version=root.get("major-version", ""),
            minor_version=root.get("minor-version", ""),
            source_path=self.source_path,
        )

        for child in root.children:
            self._add_declaration(document, child)

        return document

    def _add_declaration(self, document: Document, node: ElementNode) -> None:
        """Add one top-level element to the document."""
        match node.tag:
            case "import":
                if not node.text:
                    raise self._error(node, "import names no document")
                document.imports.append(Import(name=node.text))
            case "enum":
                document.enums.append(self._build_enum(node))
            case "xidtype":
                document.xids.append(Xid(name=self._required(node, "name")))
            case "xidunion":
                document.xid_unions.append(
                    XidUnion(
                        name=self._required(node, "name"),
                        types=[child.text for child in node.find_all("type")],
                    )
                )
            case "typedef":
                document.type_defs.append(
                    TypeDef(
                        old=self._required(node, "oldname"),
                        new=self._required(node, "newname"),
                    )
                )
            case "eventcopy":
                document.event_copies.append(
                    EventCopy(
                        name=self._required(node, "name"),
                        number=self._int(node, "number"),
                        ref=self._required(node, "ref"),
                    )
                )
            case "errorcopy":
                document.error_copies.append(
                    ErrorCopy(
                        name=self._required(node, "name"),
                        number=self._int(node, "number"),
                        ref=self._required(node, "ref"),
                    )
                )
            case "struct":
                document.structs.append(Struct(name=self._required(node, "name"), fields=self._build_fields(node)))
            case "union":
                document.unions.append(Union(name=self._required(node, "name"), fields=self._build_fields(node)))
            case "request":
                document.requests.append(self._build_request(node))
            case "event":
                document.events.append(
                    Event(
                        name=self._required(node, "name"),
                        number=self._int(node, "number"),
                        no_sequence_number=self._bool(node, "no-sequence-number"),
                        fields=self._build_fields(node),
                    )
                )
            case "error":
                document.errors.append(
                    Error(
                        name=self._required(node, "name"),
                        number=self._int(node, "number"),
                        fields=self._build_fields(node),
                    )
                )
            case tag if tag in IGNORED_TAGS:
                pass
            case _:
                logger.warning("%s: skipping unknown declaration <%s>", self.source_path, node.tag)

    def _build_enum(self, node: ElementNode) -> Enum:
        enum = Enum(name=self._required(node, "name"))
        for item_node in node.find_all("item"):
            value_nodes = self._content(item_node)
            expression = self._build_expression(value_nodes[0]) if value_nodes else None
            enum.items.append(EnumItem(name=self._required(item_node, "name"), expression=expression))
        return enum

    def _build_request(self, node: ElementNode) -> Request:
        request = Request(
            name=self._required(node, "name"),
            opcode=self._int(node, "opcode"),
            combine_adjacent=self._bool(node, "combine-adjacent"),
            fields=self._build_fields(node),
        )
        reply_node = node.find("reply")
        if reply_node is not None:
            request.reply = Reply(fields=self._build_fields(reply_node))
        return request

    def _build_fields(self, node: ElementNode) -> list[Field]:
        """Build the ordered field list of a declaration."""
        fields: list[Field] = []
        for child in node.children:
            match child.tag:
                case "pad":
                    if "bytes" not in child.attributes:
                        logger.warning("%s: skipping <pad> without bytes in '%s'", self.source_path, node.get("name", node.tag))
                        continue
                    fields.append(PadField(bytes=self._int(child, "bytes")))
                case "field":
                    fields.append(
                        SingleField(
                            name=self._required(child, "name"),
                            type=self._required(child, "type"),
                            enum=child.get("enum"),
                            mask=child.get("mask"),
                        )
                    )
                case "list":
                    length_nodes = self._content(child)
                    fields.append(
                        ListField(
                            name=self._required(child, "name"),
                            type=self._required(child, "type"),
                            length=self._build_expression(length_nodes[0]) if length_nodes else None,
                        )
                    )
                case "exprfield":
                    expr_nodes = self._content(child)
                    if not expr_nodes:
                        raise self._error(child, "exprfield has no expression")
                    fields.append(
                        ExprField(
                            name=self._required(child, "name"),
                            type=self._required(child, "type"),
                            expression=self._build_expression(expr_nodes[0]),
                        )
                    )
                case "valueparam":
                    fields.append(
                        ValueParamField(
                            mask_type=self._required(child, "value-mask-type"),
                            mask_name=self._required(child, "value-mask-name"),
                            list_name=self._required(child, "value-list-name"),
                        )
                    )
                case "reply":
                    # Built separately by _build_request
                    pass
                case tag if tag in IGNORED_TAGS:
                    pass
                case _:
                    logger.warning(
                        "%s: skipping unsupported field <%s> in '%s'",
                        self.source_path,
                        child.tag,
                        node.get("name", node.tag),
                    )
        return fields

    def _build_expression(self, node: ElementNode) -> Expression:
        """Build an expression from its element."""
        match node.tag:
            case "value":
                return Value(value=self._parse_int(node, node.text, "value"))
            case "bit":
                return Bit(bit=self._parse_int(node, node.text, "bit"))
            case "op":
                op = self._required(node, "op")
                if op not in BINARY_OPERATORS:
                    raise ExpressionUnsupportedError(f"{self.source_path}: unsupported operator '{op}'")
                operands = self._content(node)
                if len(operands) != 2:
                    raise self._error(node, f"operator '{op}' needs two operands, got {len(operands)}")
                return BinaryOp(
                    op=op,
                    left=self._build_expression(operands[0]),
                    right=self._build_expression(operands[1]),
                )
            case "unop":
                op = self._required(node, "op")
                if op not in UNARY_OPERATORS:
                    raise ExpressionUnsupportedError(f"{self.source_path}: unsupported unary operator '{op}'")
                operands = self._content(node)
                if len(operands) != 1:
                    raise self._error(node, f"unary operator '{op}' needs one operand, got {len(operands)}")
                return UnaryOp(op=op, operand=self._build_expression(operands[0]))
            case "fieldref":
                if not node.text:
                    raise self._error(node, "fieldref names no field")
                return FieldRef(name=node.text)
            case "enumref":
                if not node.text:
                    raise self._error(node, "enumref names no item")
                return EnumRef(enum=self._required(node, "ref"), item=node.text)
            case "popcount":
                operands = self._content(node)
                if len(operands) != 1:
                    raise self._error(node, "popcount needs one operand")
                return PopCount(operand=self._build_expression(operands[0]))
            case _:
                raise ExpressionUnsupportedError(f"{self.source_path}: unsupported expression <{node.tag}>")

    # ===--- attribute helpers ---=== #

    def _content(self, node: ElementNode) -> list[ElementNode]:
        """Children of a node that are not documentation."""
        return [child for child in node.children if child.tag not in IGNORED_TAGS]

    def _required(self, node: ElementNode, name: str) -> str:
        value = node.get(name)
        if not value:
            raise self._error(node, f"missing required attribute '{name}'")
        return value

    def _int(self, node: ElementNode, name: str) -> int:
        return self._parse_int(node, self._required(node, name), name)

    def _parse_int(self, node: ElementNode, text: str, what: str) -> int:
        try:
            if text.lower().startswith("0x"):
                return int(text, 16)
            return int(text)
        except ValueError:
            raise self._error(node, f"invalid integer for '{what}': {text!r}") from None

    def _bool(self, node: ElementNode, name: str) -> bool:
        value = node.get(name)
        if value is None:
            return False
        if value not in ("true", "false"):
            raise self._error(node, f"invalid boolean for '{name}': {value!r}")
        return value == "true"

    def _error(self, node: ElementNode, message: str) -> DescriptionMalformedError:
        label = f"<{node.tag} name={node.get('name')!r}>" if node.get("name") else f"<{node.tag}>"
        return DescriptionMalformedError(f"{label}: {message}", self.source_path)


def load_document(path: Path | str) -> Document:
    """
    Parse and build one description file.

    Raises:
        DescriptionNotFoundError: If the file cannot be read
        DescriptionMalformedError: If the file cannot be parsed or built
    """
    ast = DescriptionParser().parse_file(path)
    document = DocumentBuilder().build(ast)
    logger.info(
        "Loaded '%s' from %s (%d imports, %d enums, %d requests)",
        document.header,
        path,
        len(document.imports),
        len(document.enums),
        len(document.requests),
    )
    return document
