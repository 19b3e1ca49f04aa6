"""Tests for the RPN stack evaluator."""

import math

import pytest

from scicalc.errors import DivisionByZeroError, EvaluationError, ExpressionSyntaxError
from scicalc.models import AngleMode, Token, TokenKind
from scicalc.rpn import apply_function, evaluate_postfix
from scicalc.shunting_yard import to_postfix
from scicalc.tokenizer import tokenize


def _eval(expr, mode=AngleMode.RADIANS, **variables):
    return evaluate_postfix(to_postfix(tokenize(expr)), mode, variables)


# --- Operand order ---

def test_subtraction_order():
    assert _eval("10-4") == 6.0


def test_division_order():
    assert _eval("8÷2") == 4.0


def test_power_order():
    assert _eval("2^3") == 8.0


# --- Functions ---

def test_sin_degrees():
    assert apply_function("sin", 90, AngleMode.DEGREES) == pytest.approx(1.0)


def test_cos_degrees():
    assert apply_function("cos", 180, AngleMode.DEGREES) == pytest.approx(-1.0)


def test_sin_radians_uses_value_directly():
    assert apply_function("sin", 90, AngleMode.RADIANS) == pytest.approx(0.8939966636)


def test_log_is_base_ten():
    assert apply_function("log", 100) == pytest.approx(2.0)


def test_ln_is_natural():
    assert apply_function("ln", math.e) == pytest.approx(1.0)


def test_sqrt():
    assert apply_function("√", 16) == 4.0


def test_degrees_only_affect_trig():
    assert apply_function("log", 1000, AngleMode.DEGREES) == pytest.approx(3.0)


def test_angle_mode_accepts_string():
    assert _eval("sin(90)", "degrees") == pytest.approx(1.0)


# --- Variables ---

def test_variable_binding():
    assert _eval("x^2", x=3) == 9.0


def test_unbound_variable():
    with pytest.raises(EvaluationError):
        _eval("x+1")


# --- Failures ---

def test_division_by_zero():
    with pytest.raises(DivisionByZeroError) as exc:
        _eval("5÷0")
    assert isinstance(exc.value, ZeroDivisionError)
    assert exc.value.display == "Infinity"


def test_operator_without_operands():
    with pytest.raises(ExpressionSyntaxError):
        evaluate_postfix([Token.operator("+")])


def test_function_without_operand():
    with pytest.raises(ExpressionSyntaxError):
        evaluate_postfix([Token(TokenKind.FUNCTION, "sin")])


def test_leftover_values():
    with pytest.raises(ExpressionSyntaxError):
        evaluate_postfix([Token.number(1.0), Token.number(2.0)])


def test_empty_postfix():
    with pytest.raises(ExpressionSyntaxError, match="invalid expression"):
        evaluate_postfix([])


@pytest.mark.parametrize("expr", ["log(-1)", "ln(0)", "√(-4)", "10^400", "(-8)^(1÷3)"])
def test_non_finite_results(expr):
    with pytest.raises(EvaluationError):
        _eval(expr)
