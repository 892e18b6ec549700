"""
Defines the abstract syntax tree (AST) for the WHILE language.

Enums:
    ArithOp: Binary arithmetic operators (`+`, `-`, `*`, `div`, `mod`).
    BoolOp: Binary boolean connectives (`and`, `or`).
    RelOp: Relational operators (`=`, `<>`, `<`, `<=`, `>`, `>=`).

Node classes:
    Program: Non-empty sequence of statements, in execution order.
    Assign, Skip, If, While: Statements.
    Constant, Variable, BinaryArith: Arithmetic expressions.
    TrueConst, FalseConst, Not, BinaryBool, Relational: Boolean expressions.

All nodes are frozen dataclasses: they compare structurally, hash, and cannot
be mutated once the parser has built them. Every node converts to a plain
JSON-ready dictionary through `to_dict()`.

Example:
    Program((Assign("x", BinaryArith(ArithOp.ADD, Constant(1), Variable("y"))),))
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TypedDict, Union


class ArithOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    INT_DIV = "div"
    MOD = "mod"


class BoolOp(Enum):
    AND = "and"
    OR = "or"


class RelOp(Enum):
    EQ = "="
    NEQ = "<>"
    LT = "<"
    LEQ = "<="
    GT = ">"
    GEQ = ">="


class ASTDict(TypedDict, total=False):
    """
    Serialized form of a node, as returned by `to_dict()`.

    Fields:
        kind (str): Lower-case node name (e.g. "assign", "binary_arith").
        op (str): Operator spelling for binary, relational nodes.
        value (int): Integer of a constant.
        name (str): Variable name.
        variable (str): Assignment target.
        statements (list[ASTDict]): Statements of a program.
        Remaining keys hold nested ASTDicts; `else_branch` is None when absent.
    """

    kind: str
    op: str
    value: int
    name: str
    variable: str
    expr: "ASTDict"
    cond: "ASTDict"
    then_branch: "ASTDict"
    else_branch: "ASTDict | None"
    body: "ASTDict"
    operand: "ASTDict"
    left: "ASTDict"
    right: "ASTDict"
    statements: list["ASTDict"]


# Arithmetic expressions


@dataclass(frozen=True)
class Constant:
    value: int

    def to_dict(self) -> ASTDict:
        return {"kind": "constant", "value": self.value}


@dataclass(frozen=True)
class Variable:
    name: str

    def to_dict(self) -> ASTDict:
        return {"kind": "variable", "name": self.name}


@dataclass(frozen=True)
class BinaryArith:
    """`left op right`, nested to the left for chains of equal precedence."""

    op: ArithOp
    left: "ArithExpr"
    right: "ArithExpr"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "binary_arith",
            "op": self.op.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


ArithExpr = Union[Constant, Variable, BinaryArith]


# Boolean expressions


@dataclass(frozen=True)
class TrueConst:
    def to_dict(self) -> ASTDict:
        return {"kind": "true"}


@dataclass(frozen=True)
class FalseConst:
    def to_dict(self) -> ASTDict:
        return {"kind": "false"}


@dataclass(frozen=True)
class Not:
    operand: "BoolExpr"

    def to_dict(self) -> ASTDict:
        return {"kind": "not", "operand": self.operand.to_dict()}


@dataclass(frozen=True)
class BinaryBool:
    op: BoolOp
    left: "BoolExpr"
    right: "BoolExpr"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "binary_bool",
            "op": self.op.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class Relational:
    """A single comparison of two arithmetic expressions; never chained."""

    op: RelOp
    left: ArithExpr
    right: ArithExpr

    def to_dict(self) -> ASTDict:
        return {
            "kind": "relational",
            "op": self.op.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


BoolExpr = Union[TrueConst, FalseConst, Not, BinaryBool, Relational]


# Statements


@dataclass(frozen=True)
class Assign:
    variable: str
    expr: ArithExpr

    def to_dict(self) -> ASTDict:
        return {"kind": "assign", "variable": self.variable, "expr": self.expr.to_dict()}


@dataclass(frozen=True)
class Skip:
    def to_dict(self) -> ASTDict:
        return {"kind": "skip"}


@dataclass(frozen=True)
class If:
    """
    Conditional statement.

    `else_branch` is None for the one-armed `if ... then ... fi` form. That is
    a distinct shape, not shorthand for an empty else program.
    """

    cond: BoolExpr
    then_branch: "Program"
    else_branch: "Program | None" = None

    def to_dict(self) -> ASTDict:
        return {
            "kind": "if",
            "cond": self.cond.to_dict(),
            "then_branch": self.then_branch.to_dict(),
            "else_branch": (
                self.else_branch.to_dict() if self.else_branch is not None else None
            ),
        }


@dataclass(frozen=True)
class While:
    cond: BoolExpr
    body: "Program"

    def to_dict(self) -> ASTDict:
        return {"kind": "while", "cond": self.cond.to_dict(), "body": self.body.to_dict()}


Statement = Union[Assign, Skip, If, While]


@dataclass(frozen=True)
class Program:
    """
    Sequential composition of one or more statements.

    Args:
        statements: The statements in execution order. A list is accepted and
            stored as a tuple.

    Raises:
        ValueError: If `statements` is empty.
    """

    statements: tuple[Statement, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.statements, tuple):
            object.__setattr__(self, "statements", tuple(self.statements))
        if not self.statements:
            raise ValueError("Program requires at least one statement")

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def to_dict(self) -> ASTDict:
        return {
            "kind": "program",
            "statements": [s.to_dict() for s in self.statements],
        }


__all__ = [
    "ASTDict",
    "ArithExpr",
    "ArithOp",
    "Assign",
    "BinaryArith",
    "BinaryBool",
    "BoolExpr",
    "BoolOp",
    "Constant",
    "FalseConst",
    "If",
    "Not",
    "Program",
    "RelOp",
    "Relational",
    "Skip",
    "Statement",
    "TrueConst",
    "Variable",
    "While",
]
