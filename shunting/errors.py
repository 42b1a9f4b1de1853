"""
Exceptions raised while tokenizing and converting expressions.

Every error carries the offending position in the source text (when known)
and a ``details`` dict suitable for structured logging.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .tokenizer import Token


class ShuntingError(Exception):
    """Base exception for tokenizer and converter errors."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.position = position
        self.details = details or {}
        if position is not None and position >= 0:
            super().__init__(f"{message} at position {position}")
        else:
            super().__init__(message)


class LexError(ShuntingError):
    """Raised when the input text contains a character the tokenizer cannot classify."""

    def __init__(self, text: str, position: int, reason: str | None = None):
        char = text[position] if 0 <= position < len(text) else ""
        self.text = text
        self.char = char
        super().__init__(
            reason or f"Invalid character '{char}'",
            position=position,
            details={"char": char},
        )


class UnmatchedParenError(ShuntingError):
    """Raised for a ')' without a matching '(' or a '(' that is never closed."""

    def __init__(self, token: Token):
        from .tokenizer import TokenType

        self.token = token
        if token.type == TokenType.RPAREN:
            message = f"Unmatched '{token.value}': no opening parenthesis"
        else:
            message = f"Unmatched '{token.value}': parenthesis never closed"
        super().__init__(message, position=token.pos, details={"paren": token.value})


class UnknownOperatorError(ShuntingError):
    """Raised when an operator symbol has no entry in the operator table."""

    def __init__(self, symbol: str, token: Token | None = None):
        self.symbol = symbol
        self.token = token
        super().__init__(
            f"Unknown operator '{symbol}'",
            position=token.pos if token is not None else None,
            details={"symbol": symbol},
        )


class MalformedExpressionError(ShuntingError):
    """Raised in strict mode when operands and operators do not alternate."""

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        super().__init__(
            message,
            position=token.pos if token is not None else None,
            details={"token": token.value} if token is not None else {},
        )
