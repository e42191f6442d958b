"""wiring-layout: backend-agnostic layout of wiring diagrams for monoidal categories."""

from wiring_layout.config import LayoutOptions
from wiring_layout.errors import (
    ConfigurationError,
    DegenerateStructureError,
    ExpressionError,
    LayoutError,
    ParseError,
)
from wiring_layout.ir.wiring import WiringDiagram
from wiring_layout.layout.engine import layout_diagram
from wiring_layout.layout.types import BoxLayout, PortLayout, Vector2D
from wiring_layout.parsers.expression import parse
from wiring_layout.report import format_layout
from wiring_layout.syntax.types import Orientation


def layout_dsl(src: str, opts: LayoutOptions | None = None, **kw) -> WiringDiagram:
    """Parse DSL text and lay out its expression.

    Args:
        src: DSL source declaring generators and one ``expr`` term.
        opts: Layout options; keyword arguments build or override them.

    Returns:
        The laid-out wiring diagram.

    Raises:
        ValueError: If the input cannot be parsed or the options are invalid.
    """
    document = parse(src)
    return layout_diagram(document.expr, opts, **kw)


__all__ = [
    "BoxLayout",
    "ConfigurationError",
    "DegenerateStructureError",
    "ExpressionError",
    "LayoutError",
    "LayoutOptions",
    "Orientation",
    "ParseError",
    "PortLayout",
    "Vector2D",
    "WiringDiagram",
    "format_layout",
    "layout_diagram",
    "layout_dsl",
    "parse",
]
