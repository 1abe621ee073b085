"""
Implicit enum item values.

An item without a value has the value of one more than the previous
item, or 0 for the first item.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from .entities import Document, Enum
from .expressions import Value, evaluate

logger = logging.getLogger(__name__)


def iter_item_values(enum: Enum, enum_values: Callable[[str, str], int] | None = None) -> Iterator[tuple[str, int]]:
    """
    Yield (item name, value) for the items of an enum, in order.

    Items are evaluated lazily, so an item may refer to earlier items
    of its own enum through <enumref>.

    Args:
        enum: The enum
        enum_values: Lookup for <enumref> values in explicit expressions
    """
    next_value = 0
    for item in enum.items:
        if item.expression is None:
            value = next_value
        else:
            value = evaluate(item.expression, enum_values=enum_values)
        next_value = value + 1
        yield item.name, value


def item_values(enum: Enum, enum_values: Callable[[str, str], int] | None = None) -> dict[str, int]:
    """Values of all items of an enum, without modifying it."""
    return dict(iter_item_values(enum, enum_values))


def assign_enum_values(document: Document, enum_values: Callable[[str, str], int] | None = None) -> None:
    """
    Give every enum item of a document an expression.

    Items without an expression get the running counter as a Value;
    items with one reset the counter to their value plus one. Each enum
    has its own counter. Imported documents are not touched.
    """
    for enum in document.enums:
        values = item_values(enum, enum_values)
        for item in enum.items:
            if item.expression is None:
                item.expression = Value(value=values[item.name])
        logger.debug("Assigned values for enum '%s': %s", enum.name, values)
