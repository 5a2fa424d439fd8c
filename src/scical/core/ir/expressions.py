"""
Expression AST types for scical.

A closed set of frozen node models produced by the parser and consumed by
the evaluator:

- Numbers: 2, 0.5, 1e-3
- Named constants: PI, E, PHI
- Binary operations: +, -, *, /, ^ (and reserved MOD)
- Unary operations: negation, factorial (5!), percent (50%)
- Function calls: sin(x), log2(x), pow(base, exponent)

Nodes own their children exclusively; trees are built fresh per parse.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Evaluation context
# ---------------------------------------------------------------------------


class AngleMode(StrEnum):
    """How trigonometric arguments and results are interpreted."""

    DEGREES = "degrees"
    RADIANS = "radians"


# ---------------------------------------------------------------------------
# Operators and names
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    # No surface syntax produces MOD; hand-built trees only.
    MOD = "MOD"


class UnaryOp(StrEnum):
    """Unary operators: prefix negation and the postfix markers."""

    NEGATE = "NEGATE"
    FACTORIAL = "FACTORIAL"
    PERCENT = "PERCENT"


class ConstantName(StrEnum):
    """Named mathematical constants."""

    PI = "PI"
    E = "E"
    PHI = "PHI"


class FunctionName(StrEnum):
    """Built-in functions."""

    # Trigonometric
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    # Hyperbolic
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    # Logarithmic
    LOG = "log"
    LN = "ln"
    LOG2 = "log2"
    # Roots and powers
    SQRT = "sqrt"
    CBRT = "cbrt"
    POW = "pow"
    EXP = "exp"
    POW10 = "pow10"
    # Other
    ABS = "abs"
    FLOOR = "floor"
    CEIL = "ceil"
    ROUND = "round"
    FACTORIAL = "factorial"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberNode(BaseModel):
    """A numeric literal."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


class ConstantNode(BaseModel):
    """Reference to a named constant."""

    name: ConstantName

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name.value


class BinaryOpNode(BaseModel):
    """Binary operation: left op right."""

    operator: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        symbol = " mod " if self.operator == BinaryOp.MOD else f" {self.operator.value} "
        return f"({self.left}{symbol}{self.right})"


class UnaryOpNode(BaseModel):
    """Unary operation on a single operand."""

    operator: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.operator == UnaryOp.FACTORIAL:
            return f"{self.operand}!"
        if self.operator == UnaryOp.PERCENT:
            return f"{self.operand}%"
        return f"(-{self.operand})"


class FunctionNode(BaseModel):
    """
    Function call: name(arg1, arg2, ...).

    The grammar guarantees at least one argument; per-function arity is
    checked against the arity table by the parser.
    """

    name: FunctionName
    arguments: list[Expr] = Field(description="Arguments in call order")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.arguments)
        return f"{self.name.value}({args_str})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberNode | ConstantNode | BinaryOpNode | UnaryOpNode | FunctionNode

# Rebuild models for recursive forward references
BinaryOpNode.model_rebuild()
UnaryOpNode.model_rebuild()
FunctionNode.model_rebuild()
