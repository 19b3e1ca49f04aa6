"""RPN evaluator — postfix tokens → a single float.

Operands go on a value stack; a function pops one value, a binary operator
pops the right operand then the left. Nothing is rounded here.
"""

from __future__ import annotations

import logging
import math
import operator
from typing import Callable, Mapping, Optional

from scicalc.errors import DivisionByZeroError, EvaluationError, ExpressionSyntaxError
from scicalc.models import TRIG_FUNCTIONS, AngleMode, Token, TokenKind

logger = logging.getLogger(__name__)


def _divide(left: float, right: float) -> float:
    if right == 0:
        raise DivisionByZeroError()
    return left / right


_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log10,
    "ln": math.log,
    "√": math.sqrt,
}

_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "×": operator.mul,
    "÷": _divide,
    "^": math.pow,
}


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise EvaluationError(f"{what} is not a finite number")
    return value


def apply_function(name: str, operand: float, angle_mode: AngleMode = AngleMode.RADIANS) -> float:
    """Apply one of the unary functions, converting degrees for trig."""
    if name in TRIG_FUNCTIONS and angle_mode is AngleMode.DEGREES:
        operand = math.radians(operand)
    try:
        result = _FUNCTIONS[name](operand)
    except (ValueError, OverflowError):
        raise EvaluationError(f"{name}({operand:g}) is undefined")
    return _finite(result, f"{name}({operand:g})")


def apply_operator(symbol: str, left: float, right: float) -> float:
    """Apply a binary operator.

    Raises:
        DivisionByZeroError: for ``÷`` with a zero right operand.
        EvaluationError: when the result is undefined or overflows.
    """
    try:
        result = _OPERATORS[symbol](left, right)
    except (ValueError, OverflowError):
        raise EvaluationError(f"{left:g} {symbol} {right:g} is undefined")
    return _finite(result, f"{left:g} {symbol} {right:g}")


def evaluate_postfix(
    postfix: list[Token],
    angle_mode: AngleMode = AngleMode.RADIANS,
    variables: Optional[Mapping[str, float]] = None,
) -> float:
    """Evaluate a postfix token list.

    Args:
        postfix: Output of ``to_postfix``.
        angle_mode: Unit for sin/cos/tan operands.
        variables: Bindings for ``x`` / ``y`` tokens, if any.

    Raises:
        ExpressionSyntaxError: too few operands, or not exactly one value left.
        DivisionByZeroError: division by zero.
        EvaluationError: non-finite result or unbound variable.
    """
    angle_mode = AngleMode(angle_mode)
    bindings = variables or {}
    stack: list[float] = []

    for tok in postfix:
        if tok.kind is TokenKind.NUMBER:
            stack.append(tok.value)
        elif tok.kind is TokenKind.VARIABLE:
            if tok.text not in bindings:
                raise EvaluationError(f"variable {tok.text!r} has no value")
            stack.append(float(bindings[tok.text]))
        elif tok.kind is TokenKind.FUNCTION:
            if not stack:
                raise ExpressionSyntaxError("invalid expression")
            stack.append(apply_function(tok.text, stack.pop(), angle_mode))
        elif tok.kind is TokenKind.OPERATOR:
            if len(stack) < 2:
                raise ExpressionSyntaxError("invalid expression")
            right = stack.pop()
            left = stack.pop()
            stack.append(apply_operator(tok.text, left, right))
        else:
            raise ExpressionSyntaxError("invalid expression")

    if len(stack) != 1:
        logger.debug("stack holds %d values after evaluation, expected 1", len(stack))
        raise ExpressionSyntaxError("invalid expression")
    return _finite(stack[0], "result")
