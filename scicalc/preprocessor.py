"""Preprocessor — rewrite shorthand input into canonical expression text.

Two rewrites, in order:

1. Implicit multiplication: ``2(3+4)`` → ``2×(3+4)``, ``5sin(30)`` → ``5×sin(30)``,
   ``(1+2)(3)`` → ``(1+2)×(3)``, ``2π`` → ``2×π``, ``3x`` → ``3×x``.
2. Graphing forms: ``y = f(x)`` → ``f(x)`` (explicit plot) and
   ``f(x,y) = g(x,y)`` → ``(f) - (g)`` (implicit plot, zero contour).

Nothing here raises. Input the grammar doesn't cover is left in place and
fails later in the tokenizer.
"""

from __future__ import annotations

import logging
import re

from scicalc.models import PlotKind, PreparedExpression, TokenKind
from scicalc.tokenizer import classify_name, split_lexemes

logger = logging.getLogger(__name__)

_EXPLICIT_RE = re.compile(r"^\s*y\s*=\s*(?P<rhs>.*)$", re.DOTALL)

# Lexeme categories that can end / begin an implicit product.
_ENDS_OPERAND = ("number", "constant", "variable", "rparen")
_STARTS_OPERAND = ("number", "constant", "variable", "function", "lparen")


def _category(kind: str, text: str) -> str:
    if kind != "name":
        return kind
    name_kind = classify_name(text)
    if name_kind is TokenKind.CONSTANT:
        return "constant"
    if name_kind is TokenKind.FUNCTION:
        return "function"
    return "variable"


def insert_implicit_multiplication(text: str) -> str:
    """Insert ``×`` wherever two operands are adjacent.

    A product is implied when the left lexeme ends an operand (number,
    constant, variable, ``)``) and the right one begins one (constant,
    variable, function, ``(``, or a number directly after ``)``). A number
    after a constant or variable is left alone, so ``1e3`` stays an error.
    Whitespace between them doesn't matter; unknown characters break adjacency.
    """
    pieces: list[str] = []
    previous: str | None = None
    for lexeme in split_lexemes(text):
        if lexeme.kind == "space":
            pieces.append(lexeme.text)
            continue
        if lexeme.kind == "unknown":
            pieces.append(lexeme.text)
            previous = None
            continue

        current = _category(lexeme.kind, lexeme.text)
        if (
            previous in _ENDS_OPERAND
            and current in _STARTS_OPERAND
            and (current != "number" or previous == "rparen")
        ):
            pieces.append("×")
        pieces.append(lexeme.text)
        previous = current
    return "".join(pieces)


def prepare(expression: str) -> PreparedExpression:
    """Produce the canonical text and plot kind for an expression."""
    text = insert_implicit_multiplication(expression.strip())
    plot_kind = PlotKind.SCALAR

    explicit = _EXPLICIT_RE.match(text)
    if explicit and "=" not in explicit.group("rhs"):
        text = explicit.group("rhs").strip()
        plot_kind = PlotKind.EXPLICIT
    elif "y" in text and text.count("=") == 1:
        lhs, rhs = text.split("=")
        text = f"({lhs.strip()}) - ({rhs.strip()})"
        plot_kind = PlotKind.IMPLICIT

    if text != expression:
        logger.debug("prepared %r as %r (%s)", expression, text, plot_kind.value)
    return PreparedExpression(source=expression, canonical=text, plot_kind=plot_kind)
