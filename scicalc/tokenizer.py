"""Tokenizer — canonical expression text → flat list of Tokens.

The lexeme grammar lives here and is shared with the preprocessor so that both
stages agree on what a number, a name or an operator is:

    number    \\d+(\\.\\d*)? | \\.\\d+
    name      a run of ASCII letters that splits exactly into known words
              (sin cos tan log ln sqrt pi e x y), or one of √ π
    operator  + - × ÷ ^   (ASCII * and / are accepted as × and ÷)
    paren     ( )

A letter run that can't be split into known words is reported whole, so
``exp(2)`` fails on ``exp`` rather than silently becoming ``e×x×p``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from scicalc.errors import LexicalError
from scicalc.models import ALIASES, CONSTANTS, FUNCTIONS, VARIABLES, Token, TokenKind

logger = logging.getLogger(__name__)

_LEXEME_RE = re.compile(
    r"(?P<space>\s+)"
    r"|(?P<number>\d+(?:\.\d*)?|\.\d+)"
    r"|(?P<word>[A-Za-z]+)"
    r"|(?P<symbol>[√π])"
    r"|(?P<op>[-+×÷^*/])"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
)

# Longest alternatives first so "sqrt" isn't read as something shorter.
_WORD_RE = re.compile(r"sqrt|sin|cos|tan|log|ln|pi|e|x|y")

# Operators and "(" after which a "-" starts an operand.
_UNARY_CONTEXT = (TokenKind.OPERATOR, TokenKind.LEFT_PAREN)


@dataclass(frozen=True)
class Lexeme:
    """A raw slice of the input. ``kind`` is one of:
    space, number, name, op, lparen, rparen, unknown.
    """

    kind: str
    text: str
    position: int


def _split_word(word: str) -> list[str] | None:
    """Split a letter run into known words, or None if it doesn't split."""
    parts = []
    pos = 0
    while pos < len(word):
        m = _WORD_RE.match(word, pos)
        if not m:
            return None
        parts.append(m.group(0))
        pos = m.end()
    return parts


def split_lexemes(text: str) -> Iterator[Lexeme]:
    """Yield the lexemes of ``text`` left to right. Never raises.

    Characters outside the grammar come out as ``unknown`` lexemes; the
    tokenizer rejects them, the preprocessor passes them through.
    """
    pos = 0
    while pos < len(text):
        m = _LEXEME_RE.match(text, pos)
        if not m:
            yield Lexeme("unknown", text[pos], pos)
            pos += 1
            continue

        kind = m.lastgroup
        chunk = m.group(0)
        if kind == "word":
            parts = _split_word(chunk)
            if parts is None:
                yield Lexeme("unknown", chunk, pos)
            else:
                offset = pos
                for part in parts:
                    yield Lexeme("name", part, offset)
                    offset += len(part)
        elif kind == "symbol":
            yield Lexeme("name", chunk, pos)
        else:
            yield Lexeme(kind, chunk, pos)
        pos = m.end()


def classify_name(text: str) -> TokenKind:
    """Kind of a known name (after alias resolution)."""
    canonical = ALIASES.get(text, text)
    if canonical in CONSTANTS:
        return TokenKind.CONSTANT
    if canonical in FUNCTIONS:
        return TokenKind.FUNCTION
    if canonical in VARIABLES:
        return TokenKind.VARIABLE
    raise ValueError(f"not a known name: {text!r}")


def _to_token(lexeme: Lexeme) -> Token:
    if lexeme.kind == "number":
        return Token(TokenKind.NUMBER, lexeme.text, float(lexeme.text))
    if lexeme.kind == "name":
        canonical = ALIASES.get(lexeme.text, lexeme.text)
        kind = classify_name(canonical)
        value = CONSTANTS[canonical] if kind is TokenKind.CONSTANT else None
        return Token(kind, canonical, value)
    if lexeme.kind == "op":
        return Token.operator(ALIASES.get(lexeme.text, lexeme.text))
    if lexeme.kind == "lparen":
        return Token(TokenKind.LEFT_PAREN, "(")
    if lexeme.kind == "rparen":
        return Token(TokenKind.RIGHT_PAREN, ")")
    raise LexicalError(lexeme.text, lexeme.position)


def _resolve_unary_minus(tokens: list[Token]) -> list[Token]:
    """Rewrite unary minus so the converter only ever sees binary operators.

    ``-5`` and ``-π`` fold into a number; ``-(…)``, ``-sin(…)`` and ``-x``
    become ``-1 × …``. After ``^`` a negated variable is parenthesized,
    ``2^-x`` → ``2^(-1×x)``, since ``×`` binds looser than ``^``. Any other
    ``-`` is left as the binary operator.
    """
    out: list[Token] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        is_minus = tok.kind is TokenKind.OPERATOR and tok.text == "-"
        if is_minus and (i == 0 or tokens[i - 1].kind in _UNARY_CONTEXT):
            nxt = tokens[i + 1] if i + 1 < len(tokens) else None
            if nxt is not None and nxt.kind in (TokenKind.NUMBER, TokenKind.CONSTANT):
                out.append(Token.number(-nxt.value))
                i += 2
                continue
            after_power = i > 0 and tokens[i - 1].text == "^"
            if nxt is not None and nxt.kind is TokenKind.VARIABLE and after_power:
                out.extend([
                    Token(TokenKind.LEFT_PAREN, "("),
                    Token.number(-1.0),
                    Token.operator("×"),
                    nxt,
                    Token(TokenKind.RIGHT_PAREN, ")"),
                ])
                i += 2
                continue
            if nxt is not None and nxt.kind in (
                TokenKind.LEFT_PAREN, TokenKind.FUNCTION, TokenKind.VARIABLE,
            ):
                out.append(Token.number(-1.0))
                out.append(Token.operator("×"))
                i += 1
                continue
        out.append(tok)
        i += 1
    return out


def tokenize(text: str) -> list[Token]:
    """Convert an expression string into tokens.

    Empty or all-whitespace input gives an empty list.

    Raises:
        LexicalError: on the first fragment outside the grammar.
    """
    raw = [_to_token(lx) for lx in split_lexemes(text) if lx.kind != "space"]
    tokens = _resolve_unary_minus(raw)
    logger.debug("tokenized %r into %d tokens", text, len(tokens))
    return tokens
