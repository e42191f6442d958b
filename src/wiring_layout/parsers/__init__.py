"""Parsers for the expression DSL."""

from wiring_layout.parsers.expression import Document, parse

__all__ = ["Document", "parse"]
