"""scicalc — scientific-expression evaluator.

Tokenizer, Shunting-Yard converter and RPN evaluator with implicit
multiplication, unary minus, sin/cos/tan/log/ln/√, π and e, and a
radians/degrees switch. No eval() anywhere.

Usage:
    python -m scicalc eval "5sin(30)" --mode degrees   # 2.5
    python -m scicalc rpn "2+3×4"                       # 2 3 4 × +
    python -m scicalc table "y=x^2" --start -2 --stop 2
    python -m scicalc repl

    >>> from scicalc import evaluate
    >>> evaluate("2^3^2")
    512.0
"""

from scicalc.engine import CompiledExpression, compile_expression, evaluate, sample, try_evaluate
from scicalc.errors import (
    CalculatorError,
    DivisionByZeroError,
    ErrorKind,
    EvaluationError,
    ExpressionSyntaxError,
    LexicalError,
)
from scicalc.formatting import format_currency, format_number, format_percent, format_result
from scicalc.models import AngleMode, EvaluationResult, PlotKind

__all__ = [
    "AngleMode",
    "CalculatorError",
    "CompiledExpression",
    "DivisionByZeroError",
    "ErrorKind",
    "EvaluationError",
    "EvaluationResult",
    "ExpressionSyntaxError",
    "LexicalError",
    "PlotKind",
    "compile_expression",
    "evaluate",
    "format_currency",
    "format_number",
    "format_percent",
    "format_result",
    "sample",
    "try_evaluate",
]
