"""
Recursive descent parser for scical expressions.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → unary (("*" | "/") unary)*
    unary       → ("-" | "+") unary | power
    power       → postfix ("^" unary)?
    postfix     → primary ("!" | "%")*
    primary     → NUMBER | CONSTANT | func_call | "(" expression ")"
    func_call   → FUNCTION "(" expression ("," expression)* ")"

The exponent re-enters ``unary`` rather than ``power``: ``-2^2`` is
``-(2^2)`` while ``2^-2`` still parses, and ``2^3^2`` is ``2^(3^2)``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from scical.core.errors import (
    ExpressionSyntaxError,
    RecursionLimitError,
    ScicalError,
    UnbalancedParenthesisError,
)
from scical.core.expression_lang.constants import (
    FUNCTION_ARITY,
    MAX_RECURSION_DEPTH,
    OPERATOR_PRECEDENCE,
    arity_message,
)
from scical.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from scical.core.ir.expressions import (
    BinaryOp,
    BinaryOpNode,
    ConstantNode,
    Expr,
    FunctionName,
    FunctionNode,
    NumberNode,
    UnaryOp,
    UnaryOpNode,
)
from scical.core.ir.results import ParseOutcome

logger = logging.getLogger(__name__)

_ADDITIVE = frozenset(op.value for op, level in OPERATOR_PRECEDENCE.items() if level == 1)
_MULTIPLICATIVE = frozenset(op.value for op, level in OPERATOR_PRECEDENCE.items() if level == 2)

_POSTFIX: dict[TokenKind, UnaryOp] = {
    TokenKind.FACTORIAL: UnaryOp.FACTORIAL,
    TokenKind.PERCENT: UnaryOp.PERCENT,
}


def _describe(tok: Token) -> str:
    """Source-like text for a token in error messages."""
    if tok.kind == TokenKind.NUMBER:
        return f"{tok.value:g}"
    return str(tok.value)


class _Parser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token], max_depth: int = MAX_RECURSION_DEPTH) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind, message: str) -> Token:
        tok = self.current
        if tok.kind != kind:
            if kind == TokenKind.RPAREN:
                raise UnbalancedParenthesisError(message, tok.pos)
            raise ExpressionSyntaxError(message, tok.pos)
        return self.advance()

    def at_operator(self, symbols: frozenset[str] | str) -> bool:
        tok = self.current
        return tok.kind == TokenKind.OPERATOR and tok.value in symbols

    @contextmanager
    def nested(self, tok: Token) -> Iterator[None]:
        """Track one level of parenthesis or function-argument nesting."""
        self.depth += 1
        if self.depth > self.max_depth:
            raise RecursionLimitError("Expression too deeply nested", tok.pos)
        try:
            yield
        finally:
            self.depth -= 1

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.at_operator(_ADDITIVE):
            op = BinaryOp(self.advance().value)
            right = self.parse_term()
            left = BinaryOpNode(operator=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """unary (('*' | '/') unary)*"""
        left = self.parse_unary()
        while self.at_operator(_MULTIPLICATIVE):
            op = BinaryOp(self.advance().value)
            right = self.parse_unary()
            left = BinaryOpNode(operator=op, left=left, right=right)
        return left

    def parse_unary(self) -> Expr:
        """('-' | '+') unary | power"""
        if self.at_operator("-"):
            self.advance()
            operand = self.parse_unary()
            return UnaryOpNode(operator=UnaryOp.NEGATE, operand=operand)
        if self.at_operator("+"):
            self.advance()
            return self.parse_unary()
        return self.parse_power()

    def parse_power(self) -> Expr:
        """postfix ('^' unary)?"""
        base = self.parse_postfix()
        if self.at_operator("^"):
            self.advance()
            exponent = self.parse_unary()
            return BinaryOpNode(operator=BinaryOp.POW, left=base, right=exponent)
        return base

    def parse_postfix(self) -> Expr:
        """primary ('!' | '%')*"""
        node = self.parse_primary()
        while self.current.kind in _POSTFIX:
            op = _POSTFIX[self.advance().kind]
            node = UnaryOpNode(operator=op, operand=node)
        return node

    def parse_primary(self) -> Expr:
        """NUMBER | CONSTANT | func_call | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return NumberNode(value=tok.value)

        if tok.kind == TokenKind.CONSTANT:
            self.advance()
            return ConstantNode(name=tok.value)

        if tok.kind == TokenKind.FUNCTION:
            return self._parse_func_call()

        if tok.kind == TokenKind.LPAREN:
            with self.nested(tok):
                self.advance()
                expr = self.parse_expression()
                self.expect(TokenKind.RPAREN, "Expected closing parenthesis")
            return expr

        if tok.kind == TokenKind.EOF:
            raise ExpressionSyntaxError("Unexpected end of expression", tok.pos)
        if tok.kind == TokenKind.RPAREN:
            raise UnbalancedParenthesisError(f"Unexpected token: {_describe(tok)}", tok.pos)
        raise ExpressionSyntaxError(f"Unexpected token: {_describe(tok)}", tok.pos)

    def _parse_func_call(self) -> FunctionNode:
        """FUNCTION '(' expression (',' expression)* ')'"""
        name_tok = self.current
        name = FunctionName(name_tok.value)

        with self.nested(name_tok):
            self.advance()
            self.expect(TokenKind.LPAREN, "Expected opening parenthesis after function name")

            if self.current.kind == TokenKind.RPAREN:
                raise ExpressionSyntaxError(
                    f"Function {name.value} requires at least one argument", name_tok.pos
                )

            args: list[Expr] = [self.parse_expression()]
            while self.current.kind == TokenKind.COMMA:
                self.advance()
                args.append(self.parse_expression())

            self.expect(TokenKind.RPAREN, "Expected closing parenthesis")

        if len(args) != FUNCTION_ARITY[name]:
            raise ExpressionSyntaxError(arity_message(name), name_tok.pos)

        return FunctionNode(name=name, arguments=args)


def _parse_tokens(tokens: list[Token], max_depth: int) -> Expr:
    """Parse a full token list, raising on any failure."""
    if not tokens or tokens[0].kind == TokenKind.EOF:
        raise ExpressionSyntaxError("Empty expression")

    parser = _Parser(tokens, max_depth)
    try:
        expr = parser.parse_expression()
    except RecursionError:
        raise RecursionLimitError("Expression too deeply nested", parser.current.pos) from None

    # Ensure all tokens consumed
    tok = parser.current
    if tok.kind != TokenKind.EOF:
        if tok.kind == TokenKind.RPAREN:
            raise UnbalancedParenthesisError(f"Unexpected token: {_describe(tok)}", tok.pos)
        raise ExpressionSyntaxError(f"Unexpected token: {_describe(tok)}", tok.pos)

    return expr


def parse(tokens: list[Token], max_depth: int = MAX_RECURSION_DEPTH) -> ParseOutcome:
    """Parse a token list into an AST.

    Never raises: every failure is returned as a failed ``ParseOutcome``
    carrying the message, source position, and error kind.
    """
    try:
        expr = _parse_tokens(tokens, max_depth)
    except ScicalError as e:
        logger.debug("Parse failed: %s (position %s)", e.message, e.position)
        return ParseOutcome.failure(e.message, e.position, e.kind)
    return ParseOutcome.success(expr)


def parse_expr(
    source: str,
    *,
    max_depth: int = MAX_RECURSION_DEPTH,
    strict: bool = False,
) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "2 * sin(PI / 4)")
        max_depth: Maximum parenthesis/function nesting.
        strict: Reject unrecognized characters instead of skipping them.

    Returns:
        Parsed expression AST.

    Raises:
        LexicalError: If tokenization fails.
        ExpressionSyntaxError: If the expression is invalid.
        RecursionLimitError: If nesting exceeds ``max_depth``.
    """
    tokens = tokenize(source, strict=strict)
    return _parse_tokens(tokens, max_depth)
