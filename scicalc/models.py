"""Data models for the scicalc evaluator.

AngleMode, Token, operator metadata, PreparedExpression, EvaluationResult —
all the typed structures that flow through preprocessor → tokenizer →
shunting_yard → rpn → formatting.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class AngleMode(str, Enum):
    """Unit used by the trig functions."""

    RADIANS = "radians"
    DEGREES = "degrees"


class TokenKind(str, Enum):
    """Lexical categories produced by the tokenizer."""

    NUMBER = "number"
    CONSTANT = "constant"
    VARIABLE = "variable"
    FUNCTION = "function"
    OPERATOR = "operator"
    LEFT_PAREN = "lparen"
    RIGHT_PAREN = "rparen"


class Associativity(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class PlotKind(str, Enum):
    """How the graphing collaborator should treat a prepared expression."""

    SCALAR = "scalar"
    EXPLICIT = "explicit"
    IMPLICIT = "implicit"


@dataclass(frozen=True)
class OperatorInfo:
    symbol: str
    precedence: int
    associativity: Associativity


OPERATORS: dict[str, OperatorInfo] = {
    "+": OperatorInfo("+", 1, Associativity.LEFT),
    "-": OperatorInfo("-", 1, Associativity.LEFT),
    "×": OperatorInfo("×", 2, Associativity.LEFT),
    "÷": OperatorInfo("÷", 2, Associativity.LEFT),
    "^": OperatorInfo("^", 3, Associativity.RIGHT),
}

FUNCTIONS = ("sin", "cos", "tan", "log", "ln", "√")
TRIG_FUNCTIONS = ("sin", "cos", "tan")

CONSTANTS: dict[str, float] = {
    "π": math.pi,
    "e": math.e,
}

VARIABLES = ("x", "y")

# ASCII spellings accepted in place of the display symbols.
ALIASES: dict[str, str] = {
    "*": "×",
    "/": "÷",
    "pi": "π",
    "sqrt": "√",
}


@dataclass(frozen=True)
class Token:
    """A single lexical unit.

    ``text`` is the canonical symbol (``×`` rather than ``*``). ``value`` is set
    for numbers and for constants, which are resolved at tokenize time.
    """

    kind: TokenKind
    text: str
    value: Optional[float] = None

    @classmethod
    def number(cls, value: float) -> Token:
        return cls(TokenKind.NUMBER, _number_text(value), value)

    @classmethod
    def operator(cls, symbol: str) -> Token:
        return cls(TokenKind.OPERATOR, symbol)


def _number_text(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


@dataclass
class PreparedExpression:
    """Output of the preprocessor."""

    source: str
    canonical: str
    plot_kind: PlotKind = PlotKind.SCALAR


@dataclass
class SamplePoint:
    """One tabulated point of an explicit plot. ``y`` is None where undefined."""

    x: float
    y: Optional[float] = None


@dataclass
class EvaluationResult:
    """Outcome of a single evaluate call, success or failure."""

    expression: str
    angle_mode: str = AngleMode.RADIANS.value
    value: Optional[float] = None
    display: str = ""
    error_kind: Optional[str] = None
    message: str = ""
    postfix: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        d = {
            "expression": self.expression,
            "angle_mode": self.angle_mode,
            "ok": self.ok,
            "display": self.display,
        }
        if self.ok:
            d["value"] = self.value
            d["postfix"] = self.postfix
        else:
            d["error"] = {
                "kind": self.error_kind,
                "message": self.message,
            }
        return d

    @classmethod
    def from_dict(cls, d: dict) -> EvaluationResult:
        """Deserialize from a dict produced by to_dict()."""
        err = d.get("error") or {}
        return cls(
            expression=d.get("expression", ""),
            angle_mode=d.get("angle_mode", AngleMode.RADIANS.value),
            value=d.get("value"),
            display=d.get("display", ""),
            error_kind=err.get("kind"),
            message=err.get("message", ""),
            postfix=d.get("postfix", []),
        )
