"""
Constant expressions used by protocol descriptions.

Expressions appear as explicit enum item values, list lengths and
expression fields. They form a closed set of node types; evaluate()
folds a tree down to an unsigned 32-bit value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ..errors import ExpressionUnsupportedError

# X protocol card values are at most 32 bits wide
VALUE_MASK = 0xFFFFFFFF

BINARY_OPERATORS = {"+", "-", "*", "/", "&", "|", "<<", ">>"}
UNARY_OPERATORS = {"~"}


@dataclass
class Expression:
    """Base class for all expression nodes."""

    pass


@dataclass
class Value(Expression):
    """A literal integer, <value>."""

    value: int = 0


@dataclass
class Bit(Expression):
    """A single set bit, <bit>: evaluates to 1 << bit."""

    bit: int = 0


@dataclass
class BinaryOp(Expression):
    """<op op="...">left right</op>"""

    op: str = "+"
    left: Expression | None = None
    right: Expression | None = None


@dataclass
class UnaryOp(Expression):
    """<unop op="~">operand</unop>"""

    op: str = "~"
    operand: Expression | None = None


@dataclass
class FieldRef(Expression):
    """Reference to the value of another field, <fieldref>."""

    name: str = ""


@dataclass
class EnumRef(Expression):
    """Reference to an enum item value, <enumref ref="Enum">Item</enumref>."""

    enum: str = ""
    item: str = ""


@dataclass
class PopCount(Expression):
    """Number of set bits of the operand, <popcount>."""

    operand: Expression | None = None


def evaluate(
    expr: Expression,
    fields: Mapping[str, int] | None = None,
    enum_values: Callable[[str, str], int] | None = None,
) -> int:
    """
    Fold an expression into an unsigned integer.

    Args:
        expr: The expression to evaluate
        fields: Values for FieldRef nodes, by field name
        enum_values: Lookup (enum name, item name) -> value for EnumRef nodes

    Returns:
        The value, masked to 32 bits

    Raises:
        ExpressionUnsupportedError: If the expression cannot be folded
    """
    match expr:
        case Value(value=value):
            return value & VALUE_MASK
        case Bit(bit=bit):
            if bit < 0 or bit > 31:
                raise ExpressionUnsupportedError(f"Bit position out of range: {bit}")
            return 1 << bit
        case BinaryOp(op=op, left=left, right=right):
            if left is None or right is None:
                raise ExpressionUnsupportedError(f"Operator '{op}' needs two operands")
            lhs = evaluate(left, fields, enum_values)
            rhs = evaluate(right, fields, enum_values)
            return _apply_binary(op, lhs, rhs)
        case UnaryOp(op=op, operand=operand):
            if operand is None:
                raise ExpressionUnsupportedError(f"Operator '{op}' needs an operand")
            if op != "~":
                raise ExpressionUnsupportedError(f"Unsupported unary operator: {op}")
            return ~evaluate(operand, fields, enum_values) & VALUE_MASK
        case FieldRef(name=name):
            if fields is None or name not in fields:
                raise ExpressionUnsupportedError(f"Field reference '{name}' has no constant value")
            return fields[name] & VALUE_MASK
        case EnumRef(enum=enum, item=item):
            if enum_values is None:
                raise ExpressionUnsupportedError(f"Enum reference '{enum}.{item}' cannot be resolved here")
            return enum_values(enum, item) & VALUE_MASK
        case PopCount(operand=operand):
            if operand is None:
                raise ExpressionUnsupportedError("popcount needs an operand")
            return bin(evaluate(operand, fields, enum_values)).count("1")
        case _:
            raise ExpressionUnsupportedError(f"Unsupported expression: {type(expr).__name__}")


def _apply_binary(op: str, lhs: int, rhs: int) -> int:
    match op:
        case "+":
            result = lhs + rhs
        case "-":
            result = lhs - rhs
        case "*":
            result = lhs * rhs
        case "/":
            if rhs == 0:
                raise ExpressionUnsupportedError("Division by zero in expression")
            result = lhs // rhs
        case "&":
            result = lhs & rhs
        case "|":
            result = lhs | rhs
        case "<<":
            result = lhs << rhs
        case ">>":
            result = lhs >> rhs
        case _:
            raise ExpressionUnsupportedError(f"Unsupported binary operator: {op}")
    return result & VALUE_MASK
