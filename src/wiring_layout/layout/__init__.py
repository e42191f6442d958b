"""Layout engine public API."""

from __future__ import annotations

from wiring_layout.layout.engine import (
    compose_all_with_layout,
    compose_with_layout,
    default_box_size,
    layout_box,
    layout_diagram,
    layout_diagram_ports,
    layout_hom_expr,
    layout_ports,
    layout_pure_wiring,
    otimes_all_with_layout,
    otimes_with_layout,
    place_adjacent,
    shift_boxes,
    size_to_fit,
    substitute_with_layout,
)
from wiring_layout.layout.types import (
    BoxLayout,
    PortLayout,
    Vector2D,
    orient_vector,
    secondary_component,
)

__all__ = [
    "BoxLayout",
    "PortLayout",
    "Vector2D",
    "compose_all_with_layout",
    "compose_with_layout",
    "default_box_size",
    "layout_box",
    "layout_diagram",
    "layout_diagram_ports",
    "layout_hom_expr",
    "layout_ports",
    "layout_pure_wiring",
    "orient_vector",
    "otimes_all_with_layout",
    "otimes_with_layout",
    "place_adjacent",
    "secondary_component",
    "shift_boxes",
    "size_to_fit",
    "substitute_with_layout",
]
