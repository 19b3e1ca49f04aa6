"""Top-level evaluation — orchestrates preprocess → tokenize → postfix → RPN.

Data flow per call:
1. prepare(): implicit multiplication and graphing rewrites
2. tokenize(): text → tokens, unary minus resolved
3. to_postfix(): Shunting-Yard reordering
4. evaluate_postfix(): stack evaluation with the requested angle mode

Every call builds its own tokens and stacks; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from scicalc.errors import CalculatorError, EvaluationError
from scicalc.formatting import display_error, format_result
from scicalc.models import AngleMode, EvaluationResult, PlotKind, PreparedExpression, SamplePoint, Token
from scicalc.preprocessor import prepare
from scicalc.rpn import evaluate_postfix
from scicalc.shunting_yard import to_postfix
from scicalc.tokenizer import tokenize

logger = logging.getLogger(__name__)

AngleLike = Union[AngleMode, str]


@dataclass
class CompiledExpression:
    """An expression taken through every stage except evaluation.

    Lets the graphing collaborator evaluate one formula at many points without
    re-parsing it.
    """

    prepared: PreparedExpression
    tokens: list[Token] = field(default_factory=list)
    postfix: list[Token] = field(default_factory=list)

    @property
    def plot_kind(self) -> PlotKind:
        return self.prepared.plot_kind

    def evaluate(self, angle_mode: AngleLike = AngleMode.RADIANS, **variables: float) -> float:
        return evaluate_postfix(self.postfix, AngleMode(angle_mode), variables)


def compile_expression(expression: str) -> CompiledExpression:
    """Preprocess, tokenize and convert ``expression`` to postfix.

    Raises:
        LexicalError, ExpressionSyntaxError: when the text doesn't parse.
    """
    prepared = prepare(expression)
    tokens = tokenize(prepared.canonical)
    postfix = to_postfix(tokens)
    return CompiledExpression(prepared=prepared, tokens=tokens, postfix=postfix)


def evaluate(
    expression: str,
    angle_mode: AngleLike = AngleMode.RADIANS,
    variables: Optional[Mapping[str, float]] = None,
) -> float:
    """Evaluate ``expression`` to a float.

    Args:
        expression: Infix text, e.g. ``"5sin(30)"`` or ``"2^3^2"``.
        angle_mode: ``AngleMode`` or ``"radians"`` / ``"degrees"``.
        variables: Optional bindings for ``x`` and ``y``.

    Raises:
        CalculatorError: the first failure of any stage.
    """
    mode = AngleMode(angle_mode)
    compiled = compile_expression(expression)
    result = evaluate_postfix(compiled.postfix, mode, variables)
    logger.debug("evaluated %r (%s) = %r", expression, mode.value, result)
    return result


def try_evaluate(expression: str, angle_mode: AngleLike = AngleMode.RADIANS) -> EvaluationResult:
    """Evaluate without raising; failures are described in the result.

    ``display`` holds the formatted value on success, ``"Infinity"`` for
    division by zero and ``"Error"`` for every other failure.
    """
    mode = AngleMode(angle_mode)
    result = EvaluationResult(expression=expression, angle_mode=mode.value)
    try:
        compiled = compile_expression(expression)
        value = evaluate_postfix(compiled.postfix, mode)
    except CalculatorError as e:
        logger.debug("evaluation of %r failed: %s", expression, e)
        result.error_kind = e.kind.value
        result.message = e.message
        result.display = display_error(e)
        return result

    result.value = value
    result.display = format_result(value)
    result.postfix = [t.text for t in compiled.postfix]
    return result


def sample(
    expression: str,
    start: float,
    stop: float,
    steps: int = 20,
    angle_mode: AngleLike = AngleMode.RADIANS,
) -> list[SamplePoint]:
    """Tabulate an explicit plot ``y = f(x)`` at ``steps + 1`` evenly spaced x.

    Points where the formula is undefined (division by zero, log of a
    negative, ...) get ``y=None``.

    Raises:
        ValueError: if ``steps`` is less than 1.
        LexicalError, ExpressionSyntaxError: when the formula doesn't parse.
        EvaluationError: for implicit equations, which have no single y per x.
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1, got {steps}")

    mode = AngleMode(angle_mode)
    compiled = compile_expression(expression)
    if compiled.plot_kind is PlotKind.IMPLICIT:
        raise EvaluationError("implicit equations can't be tabulated as y = f(x)")

    width = (stop - start) / steps
    points: list[SamplePoint] = []
    for i in range(steps + 1):
        x = start + i * width
        try:
            y = compiled.evaluate(mode, x=x)
        except CalculatorError as e:
            logger.debug("f(%g) undefined: %s", x, e)
            y = None
        points.append(SamplePoint(x=x, y=y))
    return points
