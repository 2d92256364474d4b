"""
Base exceptions for condcss.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from CondCssUserError.

Programming errors and broken internal invariants should NOT inherit from
CondCssUserError; they propagate with full tracebacks.
"""

from __future__ import annotations


class CondCssUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    stylesheet syntax, malformed conditional chains, bad configuration.
    """
    pass


class StylesheetSyntaxError(CondCssUserError):
    """Syntax error in stylesheet source text."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column


class ConditionalChainError(CondCssUserError):
    """Malformed @if/@elseif/@else chain."""
    pass


class ConfigError(CondCssUserError):
    """Invalid compiler configuration."""
    pass


class CompilerError(RuntimeError):
    """
    Internal invariant violation in the compiler.

    Signals a traversal-protocol bug (e.g. conditional rule callback fired
    with no open conditional block), never a problem with user input.
    """
    pass


__all__ = [
    "CondCssUserError",
    "StylesheetSyntaxError",
    "ConditionalChainError",
    "ConfigError",
    "CompilerError",
]
