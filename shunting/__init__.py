"""
Shunting-yard infix to Reverse Polish Notation conversion.

This package tokenizes infix arithmetic expressions and reorders the tokens
into RPN, resolving precedence, associativity and parentheses.

    >>> from shunting import to_rpn
    >>> to_rpn("3 + 4 * 2")
    ['3', '4', '2', '*', '+']
"""

from .converter import Converter, convert, format_rpn, to_rpn
from .errors import (
    LexError,
    MalformedExpressionError,
    ShuntingError,
    UnknownOperatorError,
    UnmatchedParenError,
)
from .operators import DEFAULT_OPERATORS, Associativity, OperatorSpec, OperatorTable
from .tokenizer import Token, Tokenizer, TokenType, tokenize

__all__ = [
    "Associativity",
    "Converter",
    "DEFAULT_OPERATORS",
    "LexError",
    "MalformedExpressionError",
    "OperatorSpec",
    "OperatorTable",
    "ShuntingError",
    "Token",
    "TokenType",
    "Tokenizer",
    "UnknownOperatorError",
    "UnmatchedParenError",
    "convert",
    "format_rpn",
    "to_rpn",
    "tokenize",
]
