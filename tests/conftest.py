"""
Shared pytest fixtures for tokenizer and converter tests.

This module provides:
- A helper that converts text straight to RPN strings
- A small custom operator table
- Cleanup for the package logger and cached settings
"""

import logging

import pytest

from shunting import OperatorTable, to_rpn
from shunting.config import get_settings


@pytest.fixture
def rpn():
    """Convert infix text to a list of RPN token values."""
    def _rpn(expression: str, **kwargs) -> list[str]:
        return to_rpn(expression, **kwargs)
    return _rpn


@pytest.fixture
def custom_table():
    """Operator table with a multi-character, right-associative operator."""
    return OperatorTable(
        {
            "**": {"precedence": 4, "associativity": "right"},
            "*": {"precedence": 3},
            "%": {"precedence": 3},
            "+": {"precedence": 2},
        }
    )


@pytest.fixture
def clean_logging():
    """Restore the package logger after a test installs handlers."""
    logger = logging.getLogger("shunting")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure every test reads settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
