"""Parser for algebraic expression text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .ast import BinaryOp, BinOp, Expression, Literal, UnaryOp, UnOp, Variable


class ExprSyntaxError(SyntaxError):
    """Raised when expression text cannot be parsed."""

    def __init__(self, message: str, *, text: str, offset: int, token: Optional[str] = None):
        super().__init__(f"{message} (position {offset})")
        self.text = text
        self.offset = offset
        self.token = token
        self.reason = message


@dataclass(frozen=True)
class Token:
    kind: str  # "number" | "ident" | "op" | "lparen" | "rparen"
    text: str
    offset: int


_TOKEN_PATTERNS = [
    ("number", r"(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?"),
    ("ident", r"[^\W\d]\w*"),
    ("op", r"[+\-*/]"),
    ("lparen", r"\("),
    ("rparen", r"\)"),
    ("space", r"\s+"),
]

_TOKEN_RE = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in _TOKEN_PATTERNS))

_BINOPS = {op.symbol: op for op in BinOp}
_UNOPS = {op.value: op for op in UnOp}


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ExprSyntaxError(
                f"Unexpected character {text[pos]!r}",
                text=text,
                offset=pos,
                token=text[pos],
            )
        kind = match.lastgroup
        if kind != "space":
            tokens.append(Token(kind=kind, text=match.group(), offset=pos))
        pos = match.end()
    return tokens


class _ExprParser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    def parse(self) -> Expression:
        expr = self._parse_expr()
        token = self._peek()
        if token is not None:
            raise self._error(f"Unexpected token {token.text!r}", token)
        return expr

    def _parse_expr(self) -> Expression:
        lhs = self._parse_unary()
        op = self._take_binop()
        while op is not None:
            lhs = self._parse_binop(lhs, op)
            op = self._take_binop()
        return lhs

    def _parse_binop(self, lhs: Expression, op: BinOp) -> Expression:
        """Combine ``lhs op <unary>``, absorbing a tighter chain into the rhs.

        When ``op`` is additive and the next operator is multiplicative, the
        multiplicative chain is folded into the right operand first so that
        ``a + b * c * d`` becomes ``a + ((b * c) * d)``.
        """
        rhs = self._parse_unary()
        next_op = self._peek_binop()
        while op.is_additive and next_op is not None and not next_op.is_additive:
            self._advance()
            rhs = self._parse_binop(rhs, next_op)
            next_op = self._peek_binop()
        return BinaryOp(lhs, op, rhs)

    def _parse_unary(self) -> Expression:
        token = self._peek()
        if token is not None and token.kind == "op" and token.text in _UNOPS:
            self._advance()
            return UnaryOp(_UNOPS[token.text], self._parse_atom())
        return self._parse_atom()

    def _parse_atom(self) -> Expression:
        token = self._peek()
        if token is None:
            raise self._error("Unexpected end of expression", None)
        if token.kind == "number":
            self._advance()
            return Literal(float(token.text))
        if token.kind == "ident":
            self._advance()
            return Variable(token.text)
        if token.kind == "lparen":
            self._advance()
            inner = self._parse_expr()
            closing = self._peek()
            if closing is None:
                raise self._error("Unmatched '('", token)
            if closing.kind != "rparen":
                raise self._error(f"Expected ')' but found {closing.text!r}", closing)
            self._advance()
            return inner
        raise self._error(f"Unexpected token {token.text!r}", token)

    def _peek_binop(self) -> Optional[BinOp]:
        token = self._peek()
        if token is None or token.kind != "op":
            return None
        return _BINOPS[token.text]

    def _take_binop(self) -> Optional[BinOp]:
        op = self._peek_binop()
        if op is not None:
            self._advance()
        return op

    def _peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _error(self, message: str, token: Optional[Token]) -> ExprSyntaxError:
        if token is None:
            return ExprSyntaxError(message, text=self.text, offset=len(self.text))
        return ExprSyntaxError(message, text=self.text, offset=token.offset, token=token.text)


def parse_expr(text: str) -> Expression:
    """Parse ``text`` into an expression tree or raise :class:`ExprSyntaxError`."""
    parser = _ExprParser(text)
    try:
        return parser.parse()
    except RecursionError:
        token = parser._peek()
        raise parser._error("Expression nested too deeply", token) from None


__all__ = ["ExprSyntaxError", "Token", "parse_expr", "tokenize"]
