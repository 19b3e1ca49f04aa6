"""Error taxonomy for expression evaluation.

Every pipeline stage raises one of these and nothing else escapes
``scicalc.engine.evaluate``. Callers distinguish division by zero (shown as
"Infinity") from every other failure (shown as "Error").
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    LEXICAL = "LexicalError"
    SYNTAX = "SyntaxError"
    ARITHMETIC = "ArithmeticError"
    EVALUATION = "EvaluationError"


class CalculatorError(Exception):
    """Base class for all evaluation failures."""

    kind: ErrorKind = ErrorKind.EVALUATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def display(self) -> str:
        return "Error"

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class LexicalError(CalculatorError):
    """Raised when the tokenizer meets a character sequence it doesn't know."""

    kind = ErrorKind.LEXICAL

    def __init__(self, fragment: str, position: int) -> None:
        super().__init__(f"unrecognized input {fragment!r} at position {position}")
        self.fragment = fragment
        self.position = position


class ExpressionSyntaxError(CalculatorError):
    """Mismatched parentheses or a malformed operator/operand arrangement."""

    kind = ErrorKind.SYNTAX


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    kind = ErrorKind.ARITHMETIC

    def __init__(self, message: str = "division by zero") -> None:
        super().__init__(message)

    @property
    def display(self) -> str:
        return "Infinity"


class EvaluationError(CalculatorError):
    """Result is not a finite real number, or a variable has no binding."""

    kind = ErrorKind.EVALUATION
