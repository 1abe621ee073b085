"""
Type resolution over one document and its imports.

All queries are read-only and deterministic once the document's imports
are bound and its enum values assigned. The lookups differ
in how far they reach:

- type_alias, union_of, struct_of and the alias step of size_of search
  the document and its direct imports;
- is_resource descends through the whole bound import graph;
- has_type only looks at the document itself.

union_of and struct_of follow at most one alias, while size_of follows
the full alias chain.
"""

from __future__ import annotations

from ..config import GeneratorConfig
from ..errors import AliasCycleError, TypeUndefinedError
from .entities import Document, Struct, Union
from .enum_resolver import iter_item_values


class TypeResolver:
    """Answers type questions for the emitters of one document."""

    def __init__(self, document: Document, config: GeneratorConfig | None = None):
        """
        Initialize the resolver.

        Args:
            document: The document being generated, with imports bound
            config: Provides the base type size table and resource width
        """
        self.document = document
        self.config = config or GeneratorConfig()

    # ===--- lookups ---=== #

    def _searched_documents(self) -> list[Document]:
        """The document followed by its bound direct imports."""
        return [self.document, *self.document.imported_documents()]

    def is_base_type(self, name: str) -> bool:
        return name in self.config.base_type_sizes

    def type_alias(self, name: str) -> str | None:
        """
        The type that 'name' is declared as an alias of, if any.

        Only one hop is taken: the result may itself be an alias.
        """
        for document in self._searched_documents():
            for type_def in document.type_defs:
                if type_def.new == name:
                    return type_def.old
        return None

    def union_of(self, name: str) -> Union | None:
        """The union declared under 'name', or under the type 'name' aliases."""
        alias = self.type_alias(name)
        if alias is not None:
            name = alias

        for document in self._searched_documents():
            for union in document.unions:
                if union.name == name:
                    return union
        return None

    def struct_of(self, name: str) -> Struct | None:
        """The struct declared under 'name', or under the type 'name' aliases."""
        alias = self.type_alias(name)
        if alias is not None:
            name = alias

        for document in self._searched_documents():
            for struct in document.structs:
                if struct.name == name:
                    return struct
        return None

    def is_resource(self, name: str) -> bool:
        """Whether 'name' is a resource or resource union type. Aliases are not followed."""
        return self._is_resource_in(self.document, name, set())

    def _is_resource_in(self, document: Document, name: str, visited: set[int]) -> bool:
        if id(document) in visited:
            return False
        visited.add(id(document))

        if any(xid.name == name for xid in document.xids):
            return True
        if any(xid_union.name == name for xid_union in document.xid_unions):
            return True
        return any(self._is_resource_in(imported, name, visited) for imported in document.imported_documents())

    def has_type(self, name: str) -> bool:
        """Whether 'name' is declared by this document. Imports are not searched."""
        return self._declares(self.document, name)

    @staticmethod
    def _declares(document: Document, name: str) -> bool:
        return (
            any(enum.name == name for enum in document.enums)
            or any(xid.name == name for xid in document.xids)
            or any(xid_union.name == name for xid_union in document.xid_unions)
            or any(type_def.new == name for type_def in document.type_defs)
            or any(event_copy.name == name for event_copy in document.event_copies)
            or any(error_copy.name == name for error_copy in document.error_copies)
            or any(struct.name == name for struct in document.structs)
            or any(union.name == name for union in document.unions)
            or any(event.name == name for event in document.events)
            or any(error.name == name for error in document.errors)
        )

    def is_defined(self, name: str) -> bool:
        """Whether 'name' is a base type or is declared anywhere in the bound import graph."""
        if self.is_base_type(name):
            return True

        pending = [self.document]
        visited: set[int] = set()
        while pending:
            document = pending.pop(0)
            if id(document) in visited:
                continue
            visited.add(id(document))
            if self._declares(document, name):
                return True
            pending.extend(document.imported_documents())
        return False

    # ===--- sizes ---=== #

    def size_of(self, name: str) -> int:
        """
        Wire size of a type in bytes.

        Base types come from the size table and resources share one
        width. Anything else must be an alias, which is followed until
        one of those is reached.

        Raises:
            TypeUndefinedError: If the chain ends in an unknown name
            AliasCycleError: If the chain returns to a name already visited
        """
        return self._size_of(name, [])

    def _size_of(self, name: str, chain: list[str]) -> int:
        if name in chain:
            raise AliasCycleError(chain[chain.index(name) :] + [name])
        chain.append(name)

        size = self.config.base_type_sizes.get(name)
        if size is not None:
            return size

        if self.is_resource(name):
            return self.config.resource_type_size

        for document in self._searched_documents():
            for type_def in document.type_defs:
                if type_def.new == name:
                    return self._size_of(type_def.old, chain)

        raise TypeUndefinedError(name)

    # ===--- enum values ---=== #

    def enum_value(self, enum_name: str, item_name: str) -> int:
        """
        Value of an enum item, searching the document then its direct imports.

        Imported enums may still lack implicit values; those are computed
        here without modifying the imported document. Only the items up
        to the requested one are evaluated.

        Raises:
            TypeUndefinedError: If the enum or the item does not exist
        """
        for document in self._searched_documents():
            for enum in document.enums:
                if enum.name != enum_name:
                    continue
                for name, value in iter_item_values(enum, self.enum_value):
                    if name == item_name:
                        return value
                raise TypeUndefinedError(enum_name, f"Enum '{enum_name}' has no item '{item_name}'.")
        raise TypeUndefinedError(enum_name, f"Could not find enum '{enum_name}'.")


def check_field_types(resolver: TypeResolver) -> None:
    """
    Verify that every field of the resolver's document names a known type.

    Raises:
        TypeUndefinedError: For the first field type that is not defined
    """
    for owner, fields in resolver.document.field_owners():
        for field in fields:
            for type_name in field.type_names():
                if not resolver.is_defined(type_name):
                    raise TypeUndefinedError(
                        type_name,
                        f"Type '{type_name}' used by '{owner}' is not defined.",
                    )
