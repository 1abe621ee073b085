"""
Tests for the type resolution engine.

Uses the xproto and randr fixtures: randr imports xproto, which defines
the core resource types and aliases.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from xcb_to_code.pipeline.analyzer import (
    Document,
    Import,
    ImportResolver,
    Reply,
    Request,
    SingleField,
    Struct,
    TypeDef,
    TypeResolver,
    Union,
    Xid,
    check_field_types,
    load_document,
)
from xcb_to_code.pipeline.config import GeneratorConfig
from xcb_to_code.pipeline.errors import AliasCycleError, TypeUndefinedError

TEST_DATA = Path(__file__).parent / "test_data"


def resolved(name: str, config: GeneratorConfig | None = None) -> TypeResolver:
    document = load_document(TEST_DATA / f"{name}.xml")
    ImportResolver(TEST_DATA).resolve_imports(document)
    return TypeResolver(document, config)


@pytest.fixture
def randr():
    return resolved("randr")


class TestSizeOf:
    """Tests for TypeResolver.size_of."""

    @pytest.mark.parametrize(
        "name,size",
        [("CARD8", 1), ("CARD16", 2), ("CARD32", 4), ("INT16", 2), ("BOOL", 1), ("double", 8)],
    )
    def test_base_types(self, randr, name, size):
        assert randr.size_of(name) == size

    def test_resource_types(self, randr):
        assert randr.size_of("MODE") == 4
        # Declared in the import
        assert randr.size_of("WINDOW") == 4
        assert randr.size_of("DRAWABLE") == 4

    def test_alias_chain(self):
        resolver = resolved("xproto")
        assert resolver.size_of("TIMESTAMP") == 4
        assert resolver.size_of("EVENTTIME") == 4

    def test_alias_of_imported_alias(self, randr):
        # CONFIGTIME -> TIMESTAMP (xproto) -> CARD32
        assert randr.size_of("CONFIGTIME") == 4

    def test_alias_of_imported_resource(self, randr):
        assert randr.size_of("ROOTWIN") == 4

    def test_resource_width_is_configurable(self):
        resolver = resolved("randr", GeneratorConfig(resource_type_size=8))
        assert resolver.size_of("ROOTWIN") == 8
        assert resolver.size_of("CARD32") == 4

    def test_undefined_type(self, randr):
        with pytest.raises(TypeUndefinedError) as exc_info:
            randr.size_of("NOSUCHTYPE")
        assert exc_info.value.type_name == "NOSUCHTYPE"
        assert str(exc_info.value) == "Could not find base size of type 'NOSUCHTYPE'."

    def test_alias_to_undefined_type(self):
        document = Document(header="t", type_defs=[TypeDef(old="GHOST", new="HANDLE")])
        with pytest.raises(TypeUndefinedError) as exc_info:
            TypeResolver(document).size_of("HANDLE")
        assert exc_info.value.type_name == "GHOST"

    def test_structs_have_no_base_size(self, randr):
        with pytest.raises(TypeUndefinedError):
            randr.size_of("ScreenSize")

    def test_alias_cycle(self):
        resolver = resolved("alias_cycle")
        with pytest.raises(AliasCycleError) as exc_info:
            resolver.size_of("LOOP_A")
        assert exc_info.value.cycle == ["LOOP_A", "LOOP_B", "LOOP_A"]
        assert "LOOP_A -> LOOP_B -> LOOP_A" in str(exc_info.value)

    def test_self_alias(self):
        document = Document(header="t", type_defs=[TypeDef(old="SELF", new="SELF")])
        with pytest.raises(AliasCycleError):
            TypeResolver(document).size_of("SELF")


class TestLookups:
    """Tests for the alias, union, struct and resource lookups."""

    def test_type_alias_is_one_hop(self):
        resolver = resolved("xproto")
        assert resolver.type_alias("EVENTTIME") == "TIMESTAMP"
        assert resolver.type_alias("TIMESTAMP") == "CARD32"
        assert resolver.type_alias("CARD32") is None

    def test_type_alias_searches_imports(self, randr):
        assert randr.type_alias("TIMESTAMP") == "CARD32"

    def test_union_of(self, randr):
        union = randr.union_of("ClientMessageData")
        assert union is not None
        assert union.name == "ClientMessageData"
        assert randr.union_of("POINT") is None

    def test_union_of_follows_one_alias(self):
        union = Union(name="Data", fields=[SingleField(name="a", type="CARD8")])
        document = Document(
            header="t",
            unions=[union],
            type_defs=[TypeDef(old="Data", new="DATA1"), TypeDef(old="DATA1", new="DATA2")],
        )
        resolver = TypeResolver(document)
        assert resolver.union_of("Data") is union
        assert resolver.union_of("DATA1") is union
        # A second alias hop is not followed
        assert resolver.union_of("DATA2") is None
        # size_of follows the whole chain and finds no base size at the union
        with pytest.raises(TypeUndefinedError) as exc_info:
            resolver.size_of("DATA2")
        assert exc_info.value.type_name == "Data"

    def test_struct_of_follows_one_alias(self):
        struct = Struct(name="Pair", fields=[SingleField(name="a", type="CARD8")])
        document = Document(
            header="t",
            structs=[struct],
            type_defs=[TypeDef(old="Pair", new="PAIR1"), TypeDef(old="PAIR1", new="PAIR2")],
        )
        resolver = TypeResolver(document)
        assert resolver.struct_of("PAIR1") is struct
        assert resolver.struct_of("PAIR2") is None

    def test_is_resource(self, randr):
        assert randr.is_resource("CRTC")
        assert randr.is_resource("WINDOW")
        assert randr.is_resource("DRAWABLE")
        assert not randr.is_resource("CARD32")
        # Aliases are not followed
        assert not randr.is_resource("ROOTWIN")

    def test_is_resource_skips_unbound_imports(self):
        document = load_document(TEST_DATA / "composite.xml")
        ImportResolver(TEST_DATA).resolve_imports(document)
        resolver = TypeResolver(document)
        assert resolver.is_resource("MODE")
        assert not resolver.is_resource("WINDOW")

    def test_is_resource_terminates_on_import_cycles(self):
        first = Document(header="first")
        second = Document(header="second", xids=[Xid(name="XID")])
        first.imports.append(Import(name="second", document=second))
        second.imports.append(Import(name="first", document=first))
        resolver = TypeResolver(first)
        assert resolver.is_resource("XID")
        assert not resolver.is_resource("OTHER")

    def test_has_type_is_local(self, randr):
        assert randr.has_type("MODE")
        assert randr.has_type("Rotation")
        assert randr.has_type("ScreenSize")
        assert randr.has_type("ROOTWIN")
        # Declared only by the import
        assert not randr.has_type("WINDOW")
        assert not randr.has_type("CARD32")

    def test_is_defined_searches_imports(self, randr):
        assert randr.is_defined("WINDOW")
        assert randr.is_defined("CARD32")
        assert randr.is_defined("ScreenSize")
        assert not randr.is_defined("NOSUCHTYPE")


class TestEnumValue:
    """Tests for TypeResolver.enum_value."""

    def test_local_enum(self, randr):
        assert randr.enum_value("Rotation", "Rotate_90") == 2
        assert randr.enum_value("Transform", "ScaleDown") == 6

    def test_reference_to_own_items(self, randr):
        assert randr.enum_value("NotifyMask", "All") == 3

    def test_imported_enum(self, randr):
        assert randr.enum_value("EventMask", "KeyRelease") == 2
        assert randr.enum_value("NotifyMask", "KeyEvents") == 3

    def test_imported_implicit_values_are_computed_without_mutation(self, randr):
        assert randr.enum_value("MapState", "Viewable") == 2
        map_state = randr.document.imports[0].document.enums[1]
        assert map_state.items[2].expression is None

    def test_unknown_enum(self, randr):
        with pytest.raises(TypeUndefinedError, match="Could not find enum 'Nope'"):
            randr.enum_value("Nope", "A")

    def test_unknown_item(self, randr):
        with pytest.raises(TypeUndefinedError, match="has no item 'Rotate_45'"):
            randr.enum_value("Rotation", "Rotate_45")


class TestCheckFieldTypes:
    """Tests for check_field_types."""

    def test_resolved_document_passes(self, randr):
        check_field_types(randr)

    def test_undefined_field_type(self):
        resolver = resolved("undefined_type")
        with pytest.raises(TypeUndefinedError) as exc_info:
            check_field_types(resolver)
        assert exc_info.value.type_name == "NOSUCHTYPE"
        assert "used by 'Dangling'" in str(exc_info.value)

    def test_types_of_nested_imports_are_not_visible(self):
        resolver = resolved("composite")
        with pytest.raises(TypeUndefinedError) as exc_info:
            check_field_types(resolver)
        assert exc_info.value.type_name == "WINDOW"

    def test_reply_fields_are_checked(self):
        request = Request(
            name="Query",
            reply=Reply(fields=[SingleField(name="missing", type="GONE")]),
        )
        with pytest.raises(TypeUndefinedError, match="used by 'Query reply'"):
            check_field_types(TypeResolver(Document(header="t", requests=[request])))


if __name__ == "__main__":
    pytest.main([__file__])
