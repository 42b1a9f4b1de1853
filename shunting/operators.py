"""
Operator metadata for infix-to-RPN conversion.

An operator table maps each operator symbol to its precedence and
associativity. Tables are immutable: ``extend`` and ``without`` return new
tables, so a single table can be shared between converters and threads.

Tables can be loaded from YAML:

    operators:
      - symbol: "^"
        precedence: 4
        associativity: right
      - symbol: "+"
        precedence: 2

or, equivalently, as a mapping keyed by symbol.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import UnknownOperatorError


class Associativity(Enum):
    """Operator associativity."""

    LEFT = "left"
    RIGHT = "right"


class OperatorSpec(BaseModel):
    """Precedence and associativity of a single operator."""

    model_config = ConfigDict(frozen=True)

    precedence: int = Field(description="Binding strength; higher binds tighter")
    associativity: Associativity = Field(default=Associativity.LEFT)

    @field_validator("associativity", mode="before")
    @classmethod
    def _normalize_associativity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


# Symbols must not overlap with numbers, whitespace or grouping.
_RESERVED_CHARS = re.compile(r"[\d.\s()]")


class OperatorTable(Mapping):
    """
    Read-only mapping from operator symbol to ``OperatorSpec``.

    Args:
        operators: Mapping of symbol to ``OperatorSpec`` or a dict with
            ``precedence`` and optional ``associativity`` keys

    Raises:
        ValueError: If a symbol is empty or contains reserved characters
        pydantic.ValidationError: If an entry is not a valid spec
    """

    def __init__(self, operators: Mapping[str, OperatorSpec | Mapping[str, Any]] | None = None):
        specs: dict[str, OperatorSpec] = {}
        for symbol, spec in (operators or {}).items():
            if not isinstance(symbol, str) or not symbol:
                raise ValueError(f"Operator symbol must be a non-empty string, got {symbol!r}")
            if _RESERVED_CHARS.search(symbol):
                raise ValueError(
                    f"Operator symbol '{symbol}' may not contain digits, '.', whitespace or parentheses"
                )
            specs[symbol] = spec if isinstance(spec, OperatorSpec) else OperatorSpec.model_validate(spec)
        self._operators = MappingProxyType(specs)

    def __getitem__(self, symbol: str) -> OperatorSpec:
        try:
            return self._operators[symbol]
        except KeyError:
            raise UnknownOperatorError(symbol) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._operators)

    def __len__(self) -> int:
        return len(self._operators)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._operators

    def get(self, symbol: str, default: OperatorSpec | None = None) -> OperatorSpec | None:
        return self._operators.get(symbol, default)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OperatorTable):
            return dict(self._operators) == dict(other._operators)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        entries = ", ".join(
            f"{symbol!r}: ({spec.precedence}, {spec.associativity.value})"
            for symbol, spec in self._operators.items()
        )
        return f"OperatorTable({{{entries}}})"

    @property
    def symbols(self) -> tuple[str, ...]:
        """Operator symbols, longest first (the order the tokenizer tries them)."""
        return tuple(sorted(self._operators, key=len, reverse=True))

    def get_spec(self, symbol: str, token=None) -> OperatorSpec:
        """
        Look up an operator, attributing a failure to ``token`` if given.

        Raises:
            UnknownOperatorError: If the symbol has no entry
        """
        spec = self._operators.get(symbol)
        if spec is None:
            raise UnknownOperatorError(symbol, token)
        return spec

    def precedence(self, symbol: str) -> int:
        return self[symbol].precedence

    def associativity(self, symbol: str) -> Associativity:
        return self[symbol].associativity

    def extend(self, operators: Mapping[str, OperatorSpec | Mapping[str, Any]]) -> "OperatorTable":
        """Return a new table with ``operators`` added (or overriding existing entries)."""
        merged: dict[str, OperatorSpec | Mapping[str, Any]] = dict(self._operators)
        merged.update(operators)
        return OperatorTable(merged)

    def without(self, *symbols: str) -> "OperatorTable":
        """Return a new table with ``symbols`` removed."""
        return OperatorTable({s: spec for s, spec in self._operators.items() if s not in symbols})

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            symbol: {"precedence": spec.precedence, "associativity": spec.associativity.value}
            for symbol, spec in self._operators.items()
        }

    @classmethod
    def coerce(cls, table: "OperatorTable | Mapping[str, Any]") -> "OperatorTable":
        """Return ``table`` unchanged if it is already a table, otherwise build one from it."""
        if isinstance(table, OperatorTable):
            return table
        return cls(table)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OperatorTable":
        """
        Build a table from plain data.

        Accepts either a mapping of symbol to spec, or a mapping with an
        ``operators`` key holding such a mapping or a list of entries that
        each carry a ``symbol`` key.

        Raises:
            ValueError: If the data has the wrong shape, a list entry lacks a
                symbol, or a symbol is listed twice
        """
        operators = data.get("operators", data) if isinstance(data, Mapping) else data
        if isinstance(operators, list):
            parsed = {}
            for index, entry in enumerate(operators):
                if not isinstance(entry, Mapping):
                    raise ValueError(f"Operator entry {index} must be a mapping, got {entry!r}")
                entry = dict(entry)
                symbol = entry.pop("symbol", None)
                if symbol is None:
                    raise ValueError(f"Operator entry {index} has no 'symbol': {entry!r}")
                if symbol in parsed:
                    raise ValueError(f"Operator '{symbol}' is defined more than once")
                parsed[symbol] = entry
            operators = parsed
        if not isinstance(operators, Mapping):
            raise ValueError("Operator table must be a mapping or a list of operator entries")
        return cls(operators)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "OperatorTable":
        """
        Load a table from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            OperatorTable instance
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)


DEFAULT_OPERATORS = OperatorTable(
    {
        "^": OperatorSpec(precedence=4, associativity=Associativity.RIGHT),
        "*": OperatorSpec(precedence=3, associativity=Associativity.LEFT),
        "/": OperatorSpec(precedence=3, associativity=Associativity.LEFT),
        "+": OperatorSpec(precedence=2, associativity=Associativity.LEFT),
        "-": OperatorSpec(precedence=2, associativity=Associativity.LEFT),
    }
)
