"""
Expression evaluator for scical.

Walks an expression AST and computes a float under an angle mode.
Pure evaluation: no I/O, no mutation of the tree, no use of Python's eval().
Domain failures raise DomainError internally; ``evaluate_ast`` converts
every failure into an ``EvalOutcome``.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable

from scical.core.errors import DomainError, InternalError, ScicalError
from scical.core.expression_lang.constants import FUNCTION_ARITY, arity_message, get_constant
from scical.core.ir.expressions import (
    AngleMode,
    BinaryOp,
    BinaryOpNode,
    ConstantNode,
    Expr,
    FunctionName,
    FunctionNode,
    NumberNode,
    UnaryOp,
    UnaryOpNode,
)
from scical.core.ir.results import EvalOutcome

logger = logging.getLogger(__name__)

MAX_FACTORIAL = 170

# |cos(x)| below this is treated as a tangent asymptote
TAN_ASYMPTOTE_EPSILON = 1e-10


class FactorialCache:
    """Memoized factorials for integers in [0, 170].

    Values are written at most once per key and never change, so a single
    lock around insert-if-absent is enough to share one cache across threads.
    """

    def __init__(self) -> None:
        self._values: dict[int, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._values)

    def factorial(self, n: float) -> float:
        if n < 0:
            raise DomainError("Factorial of negative number")
        if not float(n).is_integer():
            raise DomainError("Factorial requires integer")
        if n > MAX_FACTORIAL:
            raise DomainError("Factorial overflow")

        key = int(n)
        if key <= 1:
            return 1.0

        with self._lock:
            cached = self._values.get(key)
            if cached is None:
                cached = float(math.factorial(key))
                self._values[key] = cached
        return cached


_default_factorial_cache = FactorialCache()


def _to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def _to_degrees(radians: float) -> float:
    return radians * (180 / math.pi)


def _power(base: float, exponent: float) -> float:
    """base ** exponent with real-valued semantics and IEEE overflow."""
    if base < 0 and math.isfinite(exponent) and not float(exponent).is_integer():
        raise DomainError("Cannot raise negative number to fractional power")
    try:
        return math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and float(exponent).is_integer() and exponent % 2 == 1
        return -math.inf if negative else math.inf
    except ValueError:
        # 0 ** negative
        raise DomainError("Undefined result") from None


def _round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def _floor(value: float) -> float:
    return float(math.floor(value)) if math.isfinite(value) else value


def _ceil(value: float) -> float:
    return float(math.ceil(value)) if math.isfinite(value) else value


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def _sinh(value: float) -> float:
    try:
        return math.sinh(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def _cosh(value: float) -> float:
    try:
        return math.cosh(value)
    except OverflowError:
        return math.inf


# Functions with no domain rule and no angle conversion
_PLAIN_FUNCTIONS: dict[FunctionName, Callable[[float], float]] = {
    FunctionName.SINH: _sinh,
    FunctionName.COSH: _cosh,
    FunctionName.TANH: math.tanh,
    FunctionName.CBRT: math.cbrt,
    FunctionName.EXP: _exp,
    FunctionName.ABS: math.fabs,
    FunctionName.FLOOR: _floor,
    FunctionName.CEIL: _ceil,
    FunctionName.ROUND: _round_half_up,
}

_LOGARITHMS: dict[FunctionName, Callable[[float], float]] = {
    FunctionName.LOG: math.log10,
    FunctionName.LN: math.log,
    FunctionName.LOG2: math.log2,
}


class Evaluator:
    """Evaluates expression trees under a fixed angle mode."""

    def __init__(
        self,
        angle_mode: AngleMode = AngleMode.RADIANS,
        factorial_cache: FactorialCache | None = None,
    ) -> None:
        self.angle_mode = AngleMode(angle_mode)
        if factorial_cache is None:
            factorial_cache = _default_factorial_cache
        self.factorials = factorial_cache

    def evaluate(self, node: Expr) -> float:
        """Dispatch evaluation to the appropriate handler."""
        if isinstance(node, NumberNode):
            return node.value

        if isinstance(node, ConstantNode):
            return get_constant(node.name)

        if isinstance(node, BinaryOpNode):
            return self._evaluate_binary(node)

        if isinstance(node, UnaryOpNode):
            return self._evaluate_unary(node)

        if isinstance(node, FunctionNode):
            return self._evaluate_function(node)

        raise InternalError(f"Unknown node type: {type(node).__name__}")

    def _evaluate_binary(self, node: BinaryOpNode) -> float:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)

        if node.operator == BinaryOp.ADD:
            result = left + right
        elif node.operator == BinaryOp.SUB:
            result = left - right
        elif node.operator == BinaryOp.MUL:
            result = left * right
        elif node.operator == BinaryOp.DIV:
            if right == 0:
                raise DomainError("Division by zero")
            result = left / right
        elif node.operator == BinaryOp.POW:
            result = _power(left, right)
        elif node.operator == BinaryOp.MOD:
            if right == 0:
                raise DomainError("Modulo by zero")
            try:
                result = math.fmod(left, right)
            except ValueError:
                raise DomainError("Undefined result") from None
        else:
            raise InternalError(f"Unknown operator: {node.operator}")

        # inf - inf, 0 * inf, ...
        if math.isnan(result):
            raise DomainError("Undefined result")
        return result

    def _evaluate_unary(self, node: UnaryOpNode) -> float:
        operand = self.evaluate(node.operand)

        if node.operator == UnaryOp.NEGATE:
            return -operand
        if node.operator == UnaryOp.FACTORIAL:
            return self.factorials.factorial(operand)
        if node.operator == UnaryOp.PERCENT:
            return operand / 100
        raise InternalError(f"Unknown unary operator: {node.operator}")

    def _evaluate_function(self, node: FunctionNode) -> float:
        name = node.name
        expected = FUNCTION_ARITY.get(name)
        if expected is None:
            raise InternalError(f"Unknown function: {name}")
        if len(node.arguments) != expected:
            raise InternalError(arity_message(name))

        args = [self.evaluate(arg) for arg in node.arguments]
        try:
            result = self._call(name, args)
        except ValueError:
            # math-module domain failures, e.g. sin(inf)
            raise DomainError("Undefined result") from None

        if math.isnan(result):
            raise DomainError("Undefined result")
        return result

    def _call(self, name: FunctionName, args: list[float]) -> float:
        x = args[0]

        # Trigonometric (with angle mode conversion)
        if name == FunctionName.SIN:
            return math.sin(self._input_angle(x))
        if name == FunctionName.COS:
            return math.cos(self._input_angle(x))
        if name == FunctionName.TAN:
            radians = self._input_angle(x)
            if abs(math.cos(radians)) < TAN_ASYMPTOTE_EPSILON:
                raise DomainError("Tangent undefined at this angle")
            return math.tan(radians)
        if name == FunctionName.ASIN:
            if x < -1 or x > 1:
                raise DomainError("asin domain error: input must be between -1 and 1")
            return self._output_angle(math.asin(x))
        if name == FunctionName.ACOS:
            if x < -1 or x > 1:
                raise DomainError("acos domain error: input must be between -1 and 1")
            return self._output_angle(math.acos(x))
        if name == FunctionName.ATAN:
            return self._output_angle(math.atan(x))

        # Logarithmic
        if name in _LOGARITHMS:
            if x <= 0:
                raise DomainError("Logarithm of non-positive number")
            return _LOGARITHMS[name](x)

        # Roots and powers
        if name == FunctionName.SQRT:
            if x < 0:
                raise DomainError("Square root of negative number")
            return math.sqrt(x)
        if name == FunctionName.POW:
            return _power(x, args[1])
        if name == FunctionName.POW10:
            return _power(10.0, x)

        if name == FunctionName.FACTORIAL:
            return self.factorials.factorial(x)

        plain = _PLAIN_FUNCTIONS.get(name)
        if plain is not None:
            return plain(x)

        raise InternalError(f"Unknown function: {name}")

    def _input_angle(self, value: float) -> float:
        """Convert to radians if angle mode is degrees."""
        return _to_radians(value) if self.angle_mode == AngleMode.DEGREES else value

    def _output_angle(self, value: float) -> float:
        """Convert from radians if angle mode is degrees."""
        return _to_degrees(value) if self.angle_mode == AngleMode.DEGREES else value


def evaluate_ast(
    ast: Expr,
    angle_mode: AngleMode = AngleMode.RADIANS,
    factorial_cache: FactorialCache | None = None,
) -> EvalOutcome:
    """Evaluate an AST, returning a value or an error message.

    Never raises for failures of the expression itself; an unknown angle
    mode is the caller's bug and raises ValueError.
    """
    evaluator = Evaluator(angle_mode, factorial_cache)
    try:
        value = evaluator.evaluate(ast)
    except RecursionError:
        return EvalOutcome(ok=False, error="Expression too deeply nested")
    except ScicalError as e:
        logger.debug("Evaluation failed: %s", e.message)
        return EvalOutcome(ok=False, error=e.message)
    return EvalOutcome(ok=True, value=value)
