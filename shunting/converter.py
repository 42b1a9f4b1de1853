"""
Shunting-yard conversion from infix tokens to Reverse Polish Notation.

The converter makes one left-to-right pass over the tokens with an operator
stack and an append-only output list:

- numbers go straight to the output;
- an operator first pops every stacked operator that binds at least as
  tightly (strictly tighter for right-associative operators), then is pushed;
- '(' is pushed; ')' pops operators up to the matching '(' and discards it;
- at the end the remaining operators are popped onto the output.

Parentheses never reach the output. A ')' without a matching '(' and a '('
left open at the end both raise ``UnmatchedParenError``.

By default the converter does not check that operands and operators
alternate, so it accepts any sequence of well-formed tokens. Input that is
already in RPN (for example ``3 4 +``) is outside its domain and yields an
unspecified result. Pass ``strict=True`` to reject such input with
``MalformedExpressionError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from .config import Settings, get_settings
from .errors import MalformedExpressionError, ShuntingError, UnmatchedParenError
from .operators import DEFAULT_OPERATORS, Associativity, OperatorTable
from .tokenizer import Token, TokenType, Tokenizer

logger = logging.getLogger(__name__)


class Converter:
    """
    Converts infix token sequences to RPN using a fixed operator table.

    A converter holds no per-call state, so one instance may be shared
    across threads.
    """

    def __init__(self, table: OperatorTable | Mapping = DEFAULT_OPERATORS, strict: bool = False):
        """
        Args:
            table: Operator precedence and associativity, as a table or a
                plain ``{symbol: {precedence, associativity}}`` mapping
            strict: Reject input whose operands and operators do not alternate
        """
        self.table = OperatorTable.coerce(table)
        self.strict = strict
        self.tokenizer = Tokenizer(self.table)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Converter":
        """Build a converter from ``SHUNTING_*`` settings."""
        settings = settings or get_settings()
        table = DEFAULT_OPERATORS
        if settings.OPERATORS_FILE:
            table = OperatorTable.from_yaml(settings.OPERATORS_FILE)
        return cls(table, strict=settings.STRICT)

    def convert(self, tokens: Iterable[Token]) -> list[Token]:
        """
        Reorder infix tokens into RPN.

        Args:
            tokens: Infix token sequence

        Returns:
            Tokens in RPN order, without parentheses

        Raises:
            UnmatchedParenError: If parentheses are unbalanced
            UnknownOperatorError: If an operator is missing from the table
            MalformedExpressionError: In strict mode, if the tokens are not
                a well-formed infix expression
        """
        return self._run(tokens)

    def to_rpn(self, expression: str | Iterable[Token]) -> list[str]:
        """
        Convert raw text or a pre-tokenized sequence to RPN text tokens.

        Args:
            expression: Infix expression text, or tokens

        Returns:
            The RPN sequence as token values

        Raises:
            LexError: If the text contains an unrecognized character
        """
        return [token.value for token in self._run(expression)]

    def _run(self, expression: str | Iterable[Token]) -> list[Token]:
        try:
            if isinstance(expression, str):
                tokens = self.tokenizer.tokenize(expression)
            else:
                tokens = list(expression)
            output = self._shunt(tokens)
        except ShuntingError as e:
            logger.debug("Conversion failed: %s", e, extra={"extra_data": e.details})
            raise

        logger.debug(
            "Converted %d infix tokens to %d RPN tokens: %s",
            len(tokens),
            len(output),
            format_rpn(output),
        )
        return output

    def _shunt(self, tokens: Sequence[Token]) -> list[Token]:
        stack: list[Token] = []
        output: list[Token] = []
        expect_operand = True

        for token in tokens:
            if token.type == TokenType.NUMBER:
                if self.strict and not expect_operand:
                    raise MalformedExpressionError("Missing operator before operand", token)
                output.append(token)
                expect_operand = False

            elif token.type == TokenType.OPERATOR:
                if self.strict and expect_operand:
                    raise MalformedExpressionError(f"Missing operand before '{token.value}'", token)
                self._push_operator(token, stack, output)
                expect_operand = True

            elif token.type == TokenType.LPAREN:
                if self.strict and not expect_operand:
                    raise MalformedExpressionError("Missing operator before '('", token)
                stack.append(token)

            elif token.type == TokenType.RPAREN:
                if self.strict and expect_operand:
                    raise MalformedExpressionError("Missing operand before ')'", token)
                while stack and stack[-1].type != TokenType.LPAREN:
                    output.append(stack.pop())
                if not stack:
                    raise UnmatchedParenError(token)
                stack.pop()
                expect_operand = False

            else:
                raise TypeError(f"Unsupported token: {token!r}")

        if self.strict and expect_operand:
            if tokens:
                raise MalformedExpressionError("Expression ends where an operand is expected", tokens[-1])
            raise MalformedExpressionError("Empty expression")

        while stack:
            top = stack.pop()
            if top.type == TokenType.LPAREN:
                raise UnmatchedParenError(top)
            output.append(top)

        return output

    def _push_operator(self, token: Token, stack: list[Token], output: list[Token]) -> None:
        spec = self.table.get_spec(token.value, token)

        while stack and stack[-1].type == TokenType.OPERATOR:
            top = self.table.get_spec(stack[-1].value, stack[-1])
            if top.precedence > spec.precedence or (
                top.precedence == spec.precedence and top.associativity == Associativity.LEFT
            ):
                output.append(stack.pop())
            else:
                break

        stack.append(token)


def convert(
    tokens: Iterable[Token],
    table: OperatorTable | Mapping = DEFAULT_OPERATORS,
    strict: bool = False,
) -> list[Token]:
    """Convert infix ``tokens`` to RPN with ``table``."""
    return Converter(table, strict=strict).convert(tokens)


def to_rpn(
    expression: str | Iterable[Token],
    table: OperatorTable | Mapping = DEFAULT_OPERATORS,
    strict: bool = False,
) -> list[str]:
    """Tokenize (if needed) and convert ``expression``, returning RPN text tokens."""
    return Converter(table, strict=strict).to_rpn(expression)


def format_rpn(tokens: Iterable[Token | str]) -> str:
    """Join RPN tokens with single spaces, e.g. ``"3 4 2 * +"``."""
    return " ".join(str(token) for token in tokens)
