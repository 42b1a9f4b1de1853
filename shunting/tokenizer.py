"""
Tokenizer for infix arithmetic expressions.

This module provides regex-based tokenization of numbers, operators and
parentheses. Operator patterns are built from an operator table, so a custom
table changes which symbols are recognized.

Unary signs are not disambiguated: a '-' or '+' at the start of the input,
after another operator or after '(' is emitted as an ordinary OPERATOR token,
exactly like a binary one. Callers that need unary minus must rewrite the
token stream themselves before conversion.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto

from .errors import LexError
from .operators import DEFAULT_OPERATORS, OperatorTable


class TokenType(Enum):
    """Token types for infix expressions."""

    NUMBER = auto()
    OPERATOR = auto()
    LPAREN = auto()  # (
    RPAREN = auto()  # )


@dataclass(frozen=True)
class Token:
    """
    Represents a single token in the expression.

    Attributes:
        type: The token type
        value: The source text of the token; numbers are kept as text
        pos: Position in the source string (-1 when built by hand)
    """

    type: TokenType
    value: str
    pos: int = -1

    def __repr__(self) -> str:
        kind = getattr(self.type, "name", self.type)
        return f"Token({kind}, '{self.value}', pos={self.pos})"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def number(cls, text: str, pos: int = -1) -> "Token":
        return cls(TokenType.NUMBER, text, pos)

    @classmethod
    def operator(cls, symbol: str, pos: int = -1) -> "Token":
        return cls(TokenType.OPERATOR, symbol, pos)

    @classmethod
    def lparen(cls, pos: int = -1) -> "Token":
        return cls(TokenType.LPAREN, "(", pos)

    @classmethod
    def rparen(cls, pos: int = -1) -> "Token":
        return cls(TokenType.RPAREN, ")", pos)


class Tokenizer:
    """
    Tokenizes infix expressions using a combined regex.

    The tokenizer handles:
    - Numbers: a run of digits with at most one decimal point ("12", "3.5", ".5", "7.")
    - Operators: every symbol of the operator table, longest match first
    - Parentheses
    - Whitespace, which is skipped
    """

    NUMBER_PATTERN = r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+"

    def __init__(self, table: OperatorTable | Mapping = DEFAULT_OPERATORS):
        """
        Initialize tokenizer with an operator table.

        Args:
            table: Operators to recognize, as a table or a plain
                ``{symbol: {precedence, associativity}}`` mapping
                (defaults to ``+ - * / ^``)
        """
        self.table = OperatorTable.coerce(table)
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile the combined pattern with one named group per token kind."""
        patterns = {
            "NUMBER": self.NUMBER_PATTERN,
            "LPAREN": r"\(",
            "RPAREN": r"\)",
            "WHITESPACE": r"\s+",
        }
        if len(self.table):
            patterns["OPERATOR"] = "|".join(re.escape(symbol) for symbol in self.table.symbols)

        self.combined_pattern = re.compile(
            "|".join(f"(?P<{name}>{pattern})" for name, pattern in patterns.items())
        )

    def tokenize(self, expression: str) -> list[Token]:
        """
        Tokenize an infix expression.

        Args:
            expression: The expression to tokenize

        Returns:
            List of tokens

        Raises:
            LexError: If the expression contains an unrecognized character
                or a number with more than one decimal point
        """
        tokens: list[Token] = []
        pos = 0

        while pos < len(expression):
            match = self.combined_pattern.match(expression, pos)

            if not match:
                raise LexError(expression, pos)

            kind = match.lastgroup
            value = match.group()
            token_pos = pos
            pos = match.end()

            if kind == "WHITESPACE":
                continue

            if kind == "NUMBER" and pos < len(expression) and expression[pos] == ".":
                raise LexError(expression, pos, reason=f"Malformed number '{value}.'")

            tokens.append(Token(TokenType[kind], value, token_pos))

        return tokens


def tokenize(expression: str, table: OperatorTable | Mapping = DEFAULT_OPERATORS) -> list[Token]:
    """Tokenize ``expression`` with the operators of ``table``."""
    return Tokenizer(table).tokenize(expression)
