"""Shunting-Yard converter — infix tokens → postfix (RPN) tokens.

Single linear pass with an output queue and an operator stack holding
operators, functions and ``(``. Functions bind to the parenthesized group
that follows them and are emitted when that group closes.
"""

from __future__ import annotations

import logging

from scicalc.errors import ExpressionSyntaxError
from scicalc.models import OPERATORS, Associativity, Token, TokenKind

logger = logging.getLogger(__name__)


def _pops_before(top: Token, incoming: Token) -> bool:
    """True if ``top`` must leave the stack before ``incoming`` is pushed."""
    if top.kind is not TokenKind.OPERATOR:
        return False
    top_info = OPERATORS[top.text]
    info = OPERATORS[incoming.text]
    if top_info.precedence > info.precedence:
        return True
    return top_info.precedence == info.precedence and info.associativity is Associativity.LEFT


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Reorder ``tokens`` into postfix.

    Constants are lowered to NUMBER tokens (keeping their symbol as text);
    parentheses never appear in the output.

    Raises:
        ExpressionSyntaxError: on mismatched parentheses.
    """
    output: list[Token] = []
    stack: list[Token] = []

    for tok in tokens:
        if tok.kind in (TokenKind.NUMBER, TokenKind.VARIABLE):
            output.append(tok)
        elif tok.kind is TokenKind.CONSTANT:
            output.append(Token(TokenKind.NUMBER, tok.text, tok.value))
        elif tok.kind in (TokenKind.FUNCTION, TokenKind.LEFT_PAREN):
            stack.append(tok)
        elif tok.kind is TokenKind.OPERATOR:
            while stack and _pops_before(stack[-1], tok):
                output.append(stack.pop())
            stack.append(tok)
        elif tok.kind is TokenKind.RIGHT_PAREN:
            while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise ExpressionSyntaxError("mismatched parentheses")
            stack.pop()
            if stack and stack[-1].kind is TokenKind.FUNCTION:
                output.append(stack.pop())

    while stack:
        tok = stack.pop()
        if tok.kind is TokenKind.LEFT_PAREN:
            raise ExpressionSyntaxError("mismatched parentheses")
        output.append(tok)

    logger.debug("postfix: %s", " ".join(t.text for t in output))
    return output
