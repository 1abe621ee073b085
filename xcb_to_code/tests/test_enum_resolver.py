"""
Tests for implicit enum value assignment.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from xcb_to_code.pipeline.analyzer import Document, Enum, EnumItem, Import, assign_enum_values, item_values
from xcb_to_code.pipeline.analyzer.expressions import Bit, EnumRef, Value
from xcb_to_code.pipeline.errors import ExpressionUnsupportedError


def make_enum(name, *items):
    return Enum(name=name, items=[EnumItem(name=item_name, expression=expr) for item_name, expr in items])


class TestAssignEnumValues(TestCase):
    def test_all_implicit(self):
        enum = make_enum("MapState", ("Unmapped", None), ("Unviewable", None), ("Viewable", None))
        assign_enum_values(Document(enums=[enum]))
        self.assertEqual([item.value for item in enum.items], [0, 1, 2])
        self.assertEqual(enum.items[2].expression, Value(value=2))

    def test_counter_resumes_after_explicit_value(self):
        enum = make_enum("Transform", ("Unit", None), ("ScaleUp", Value(value=5)), ("ScaleDown", None))
        assign_enum_values(Document(enums=[enum]))
        self.assertEqual([item.value for item in enum.items], [0, 5, 6])

    def test_counter_resumes_after_bit(self):
        enum = make_enum("Mask", ("A", Bit(bit=3)), ("B", None))
        assign_enum_values(Document(enums=[enum]))
        self.assertEqual([item.value for item in enum.items], [8, 9])

    def test_explicit_expressions_are_kept(self):
        bit = Bit(bit=3)
        enum = make_enum("Mask", ("A", bit))
        assign_enum_values(Document(enums=[enum]))
        self.assertIs(enum.items[0].expression, bit)

    def test_each_enum_has_its_own_counter(self):
        first = make_enum("First", ("A", None), ("B", Value(value=10)))
        second = make_enum("Second", ("C", None), ("D", None))
        assign_enum_values(Document(enums=[first, second]))
        self.assertEqual([item.value for item in second.items], [0, 1])

    def test_imported_documents_are_not_touched(self):
        imported_enum = make_enum("Imported", ("X", None))
        imported = Document(header="other", enums=[imported_enum])
        document = Document(header="root", imports=[Import(name="other", document=imported)])
        assign_enum_values(document)
        self.assertIsNone(imported_enum.items[0].expression)

    def test_enumref_item_value(self):
        item = EnumItem(name="Alias", expression=EnumRef(enum="Other", item="X"))
        with self.assertRaises(ExpressionUnsupportedError):
            item.value
        self.assertEqual(item.resolve_value(lambda enum, name: 7), 7)
        self.assertIsNone(EnumItem(name="Implicit").resolve_value(lambda enum, name: 7))

    def test_item_values_does_not_modify(self):
        enum = make_enum("Transform", ("Unit", None), ("ScaleUp", Value(value=5)), ("ScaleDown", None))
        self.assertEqual(item_values(enum), {"Unit": 0, "ScaleUp": 5, "ScaleDown": 6})
        self.assertIsNone(enum.items[0].expression)


if __name__ == "__main__":
    unittest.main()
