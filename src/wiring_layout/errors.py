"""Exception types raised by wiring-layout.

Every error is a ``ValueError`` so callers that only care about bad input can
catch that.
"""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for errors raised by the layout core."""


class ConfigurationError(LayoutError):
    """Invalid layout options (non-positive box size, negative padding, ...)."""


class DegenerateStructureError(LayoutError):
    """A wiring diagram whose ports or wires cannot be sized or placed."""


class ExpressionError(ValueError):
    """An ill-formed or ill-typed morphism expression."""


class ParseError(ValueError):
    """Syntax error in the expression DSL."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} (line {line}, column {column})")
        self.line = line
        self.column = column
