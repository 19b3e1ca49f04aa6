"""Tests for the tokenizer: lexeme grammar, aliases, unary minus, lexical errors."""

import math

import pytest

from scicalc.errors import ErrorKind, LexicalError
from scicalc.models import TokenKind
from scicalc.tokenizer import split_lexemes, tokenize


def _texts(expr):
    return [t.text for t in tokenize(expr)]


# --- Basic scanning ---

def test_numbers_and_operators():
    tokens = tokenize("3.14+2")
    assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.OPERATOR, TokenKind.NUMBER]
    assert tokens[0].value == pytest.approx(3.14)
    assert tokens[2].value == 2.0


def test_decimal_forms():
    assert [t.value for t in tokenize(".5+3.")] == [0.5, None, 3.0]


def test_whitespace_is_skipped():
    assert _texts("  2  +  3  ") == ["2", "+", "3"]


def test_empty_input_gives_no_tokens():
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_constants_resolve_to_values():
    pi, plus, e = tokenize("π+e")
    assert pi.kind is TokenKind.CONSTANT
    assert pi.value == math.pi
    assert e.value == math.e


def test_functions_and_parens():
    kinds = [t.kind for t in tokenize("sin(√(4))")]
    assert kinds == [
        TokenKind.FUNCTION, TokenKind.LEFT_PAREN,
        TokenKind.FUNCTION, TokenKind.LEFT_PAREN, TokenKind.NUMBER, TokenKind.RIGHT_PAREN,
        TokenKind.RIGHT_PAREN,
    ]


def test_variables():
    tokens = tokenize("x×y")
    assert tokens[0].kind is TokenKind.VARIABLE
    assert tokens[2].kind is TokenKind.VARIABLE


# --- ASCII aliases ---

def test_ascii_operators_are_canonicalized():
    assert _texts("2*3/4") == ["2", "×", "3", "÷", "4"]


def test_ascii_names_are_canonicalized():
    assert _texts("sqrt(pi)") == ["√", "(", "π", ")"]


def test_letter_run_splits_into_known_words():
    names = [lx.text for lx in split_lexemes("xsin") if lx.kind == "name"]
    assert names == ["x", "sin"]


# --- Unary minus ---

def test_leading_minus_folds_into_number():
    tokens = tokenize("-5+3")
    assert tokens[0].kind is TokenKind.NUMBER
    assert tokens[0].value == -5.0
    assert _texts("-5+3") == ["-5", "+", "3"]


def test_minus_before_paren_becomes_negative_one_times():
    assert _texts("-(2+3)") == ["-1", "×", "(", "2", "+", "3", ")"]


def test_minus_before_function():
    assert _texts("-sin(x)") == ["-1", "×", "sin", "(", "x", ")"]


def test_minus_before_constant_folds_into_number():
    tokens = tokenize("-π")
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.NUMBER
    assert tokens[0].value == -math.pi


def test_minus_before_variable():
    assert _texts("-x^2") == ["-1", "×", "x", "^", "2"]


def test_minus_before_variable_after_power_is_grouped():
    assert _texts("2^-x") == ["2", "^", "(", "-1", "×", "x", ")"]


def test_minus_after_open_paren():
    assert _texts("3-(-2)") == ["3", "-", "(", "-2", ")"]


def test_minus_after_operator():
    assert _texts("2^-3") == ["2", "^", "-3"]


def test_binary_minus_untouched():
    assert _texts("5-3") == ["5", "-", "3"]


# --- Lexical errors ---

def test_unknown_character():
    with pytest.raises(LexicalError) as exc:
        tokenize("2$3")
    assert exc.value.fragment == "$"
    assert exc.value.position == 1
    assert exc.value.kind is ErrorKind.LEXICAL


def test_unknown_word_reported_whole():
    with pytest.raises(LexicalError) as exc:
        tokenize("exp(2)")
    assert exc.value.fragment == "exp"


def test_equals_sign_is_not_an_operator():
    with pytest.raises(LexicalError):
        tokenize("x=2")
