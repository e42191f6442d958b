"""Backend-agnostic layout of wiring diagrams via morphism expressions.

The structure of a morphism expression determines the layout:
  1. Leaves (generators) become single boxes sized by their port counts
  2. Identities and braids become box-free diagrams sized the same way
  3. Compositions and products are laid out child by child, placed side by
     side along the primary (compose) or secondary (otimes) axis
  4. Each composite is shrink-wrapped around its contents and recentred
  5. Nested sub-diagrams are flattened into their parent's coordinates
  6. The root diagram's own ports are laid out last

Coordinates are relative to the centre of the enclosing diagram. With a
vertical orientation the secondary axis is conventionally drawn with positive
y pointing down; all positions and sizes are dimensionless. Wires are copied
structurally and get no layout data.
"""

from __future__ import annotations

import dataclasses
import logging
from functools import reduce
from typing import Any, Iterable

from wiring_layout.config import LayoutOptions
from wiring_layout.errors import ConfigurationError, DegenerateStructureError, LayoutError
from wiring_layout.ir.wiring import (
    AbstractBox,
    Box,
    WiringDiagram,
    compose,
    otimes,
    singleton_diagram,
    substitute,
    to_wiring_diagram,
)
from wiring_layout.layout.types import BoxLayout, PortLayout, Vector2D, orient_vector
from wiring_layout.syntax.expr import HomExpr, as_sexpr, codom, dom, ob_factors
from wiring_layout.syntax.types import HomKind, PortKind

logger = logging.getLogger(__name__)


# ─── Main entry point ────────────────────────────────────────────────────────


def layout_diagram(expr: HomExpr, opts: LayoutOptions | None = None, **kw: Any) -> WiringDiagram:
    """Lay out a morphism expression as a wiring diagram.

    Options may be given as a ``LayoutOptions`` record, as keyword arguments,
    or both (keywords override the record). They are validated before any
    layout work starts.
    """
    if opts is None:
        opts = LayoutOptions(**kw)
    elif kw:
        opts = dataclasses.replace(opts, **kw)
    logger.debug("Laying out %s with %s", as_sexpr(expr), opts)
    diagram = layout_hom_expr(expr, opts)
    return layout_diagram_ports(diagram, opts)


def layout_hom_expr(expr: HomExpr, opts: LayoutOptions) -> WiringDiagram:
    """Recursively lay out a morphism expression.

    The result is centred at its own origin and carries a ``BoxLayout`` with
    its size; its own ports are not laid out.
    """
    match expr.kind:
        case HomKind.Generator:
            return layout_box(expr, ob_factors(dom(expr)), ob_factors(codom(expr)), opts)
        case HomKind.Compose:
            return compose_all_with_layout([layout_hom_expr(arg, opts) for arg in expr.args], opts)
        case HomKind.Otimes:
            return otimes_all_with_layout([layout_hom_expr(arg, opts) for arg in expr.args], opts)
        case HomKind.Id | HomKind.Braid:
            return layout_pure_wiring(to_wiring_diagram(expr), opts)
    raise LayoutError(f"Cannot lay out morphism of kind {expr.kind}")


# ─── Box layout ──────────────────────────────────────────────────────────────


def layout_box(value: Any, inputs: list, outputs: list, opts: LayoutOptions) -> WiringDiagram:
    """Create a box with laid-out ports, wrapped in a singleton diagram."""
    size = default_box_size(len(inputs), len(outputs), opts)
    box = Box(
        BoxLayout(value=value, size=size),
        layout_ports(PortKind.Input, inputs, size, opts),
        layout_ports(PortKind.Output, outputs, size, opts),
    )
    return size_to_fit(singleton_diagram(box, inputs, outputs), opts)


def compose_with_layout(d1: WiringDiagram, d2: WiringDiagram, opts: LayoutOptions) -> WiringDiagram:
    """Compose two laid-out diagrams, placing ``d2`` after ``d1`` along the flow."""
    _check_box_layout(d1)
    _check_box_layout(d2)
    diagram = compose(d1, d2, unsubstituted=True)
    _strip_port_layouts(diagram)
    place_adjacent(d1, d2, direction=orient_vector(opts.orientation), pad=opts.sequence_pad)
    return substitute_with_layout(size_to_fit(diagram, opts))


def otimes_with_layout(d1: WiringDiagram, d2: WiringDiagram, opts: LayoutOptions) -> WiringDiagram:
    """Tensor two laid-out diagrams, stacking ``d2`` after ``d1`` on the secondary axis."""
    _check_box_layout(d1)
    _check_box_layout(d2)
    diagram = otimes(d1, d2, unsubstituted=True)
    _strip_port_layouts(diagram)
    place_adjacent(d1, d2, direction=orient_vector(opts.orientation, 0.0, 1.0), pad=opts.parallel_pad)
    return substitute_with_layout(size_to_fit(diagram, opts))


def compose_all_with_layout(diagrams: Iterable[WiringDiagram], opts: LayoutOptions) -> WiringDiagram:
    diagrams = list(diagrams)
    if not diagrams:
        raise LayoutError("Nothing to compose")
    logger.debug("Composing %d diagrams", len(diagrams))
    return reduce(lambda d1, d2: compose_with_layout(d1, d2, opts), diagrams)


def otimes_all_with_layout(diagrams: Iterable[WiringDiagram], opts: LayoutOptions) -> WiringDiagram:
    diagrams = list(diagrams)
    if not diagrams:
        raise LayoutError("Nothing to tensor")
    logger.debug("Tensoring %d diagrams", len(diagrams))
    return reduce(lambda d1, d2: otimes_with_layout(d1, d2, opts), diagrams)


def size_to_fit(diagram: WiringDiagram, opts: LayoutOptions, pad: Vector2D = Vector2D()) -> WiringDiagram:
    """Size a wiring diagram to fit its contents.

    The inner boxes are shifted so that their bounding box is centred at the
    origin. The size never drops below ``default_box_size`` for the diagram's
    port counts. Any position the diagram already has is kept.
    """
    if pad.x < 0 or pad.y < 0:
        raise ConfigurationError(f"Padding must be non-negative, got {pad}")
    minimum_size = default_box_size(len(diagram.input_ports), len(diagram.output_ports), opts)
    layouts = [_box_layout(box) for box in diagram.boxes()]

    if layouts:
        lower = reduce(Vector2D.emin, (layout.lower_corner for layout in layouts))
        upper = reduce(Vector2D.emax, (layout.upper_corner for layout in layouts))
        size = minimum_size.emax(upper - lower + pad * 2)
        shift_boxes(diagram, -((lower + upper) / 2))
    else:
        size = minimum_size

    if isinstance(diagram.value, BoxLayout):
        diagram.value.size = size
    else:
        diagram.value = BoxLayout(size=size)
    return diagram


def substitute_with_layout(diagram: WiringDiagram) -> WiringDiagram:
    """Flatten every nested sub-diagram into ``diagram``, preserving layouts.

    Boxes of each sub-diagram are shifted by the sub-diagram's own position so
    they end up in the parent's coordinate frame. Nested diagrams are
    flattened depth-first.
    """
    _check_nested_layouts(diagram)
    vs = [v for v in diagram.box_ids() if isinstance(diagram.box(v), WiringDiagram)]
    for v in vs:
        sub = diagram.box(v)
        substitute_with_layout(sub)
        shift_boxes(sub, sub.value.position)
    return substitute(diagram, vs)


def place_adjacent(
    box1: AbstractBox,
    box2: AbstractBox,
    direction: Vector2D = Vector2D(1.0, 0.0),
    pad: float = 0.0,
) -> None:
    """Place one box adjacent to another along ``direction``.

    Their facing edges end up ``pad`` apart, symmetric about the origin. Only
    the relative positions are meaningful.
    """
    layout1, layout2 = _box_layout(box1), _box_layout(box2)
    pad_vector = Vector2D(pad, pad)
    layout1.position = -((layout1.size + pad_vector) / 2 * direction)
    layout2.position = (layout2.size + pad_vector) / 2 * direction


def shift_boxes(diagram: WiringDiagram, offset: Vector2D) -> WiringDiagram:
    """Shift all boxes within a wiring diagram by a fixed offset."""
    for box in diagram.boxes():
        layout = _box_layout(box)
        layout.position = layout.position + offset
    return diagram


def default_box_size(nin: int, nout: int, opts: LayoutOptions) -> Vector2D:
    """Compute the default size of a box based on the number of its ports.

    This is the unique formula consistent with the padding used for monoidal
    products: the size of a product of boxes depends only on the total number
    of ports, not on the number of boxes.
    """
    if nin < 0 or nout < 0:
        raise DegenerateStructureError(f"Port counts must be non-negative, got {nin} and {nout}")
    base_size = opts.base_box_size
    n = max(1, nin, nout)
    return orient_vector(opts.orientation, base_size, n * base_size + (n - 1) * opts.parallel_pad)


# ─── Port layout ─────────────────────────────────────────────────────────────


def layout_ports(port_kind: PortKind, port_values: list, box_size: Vector2D, opts: LayoutOptions) -> list[PortLayout]:
    """Lay out ports on one side of a rectangular box.

    Assumes the box is at least as large as ``default_box_size()``.
    """
    normal = orient_vector(opts.orientation) * (-1.0 if port_kind == PortKind.Input else 1.0)
    start = box_size / 2 * normal
    step = orient_vector(opts.orientation, 0.0, opts.base_box_size + opts.parallel_pad)
    n = len(port_values)
    return [
        PortLayout(_port_value(value), start + step * ((2 * k - (n - 1)) / 2), normal)
        for k, value in enumerate(port_values)
    ]


def layout_diagram_ports(diagram: WiringDiagram, opts: LayoutOptions) -> WiringDiagram:
    """Lay out a diagram's own input and output ports on its boundary."""
    size = _box_layout(diagram).size
    diagram.input_ports = layout_ports(PortKind.Input, diagram.input_ports, size, opts)
    diagram.output_ports = layout_ports(PortKind.Output, diagram.output_ports, size, opts)
    return diagram


# ─── Wire layout ─────────────────────────────────────────────────────────────


def layout_pure_wiring(diagram: WiringDiagram, opts: LayoutOptions) -> WiringDiagram:
    """Lay out a wiring diagram with no boxes (identities, braids)."""
    if diagram.nboxes() != 0:
        raise DegenerateStructureError(f"Expected a diagram without boxes, got {diagram.nboxes()} boxes")
    inputs, outputs = diagram.input_ports, diagram.output_ports
    size = default_box_size(len(inputs), len(outputs), opts)
    result = WiringDiagram(
        layout_ports(PortKind.Input, inputs, size, opts),
        layout_ports(PortKind.Output, outputs, size, opts),
        value=BoxLayout(size=size),
    )
    # For now, wires get no layout data at all!
    result.add_wires(diagram.wires())
    return result


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _port_value(port: Any) -> Any:
    return port.value if isinstance(port, PortLayout) else port


def _strip_port_layouts(diagram: WiringDiagram) -> None:
    diagram.input_ports = [_port_value(p) for p in diagram.input_ports]
    diagram.output_ports = [_port_value(p) for p in diagram.output_ports]


def _box_layout(box: AbstractBox) -> BoxLayout:
    if not isinstance(box.value, BoxLayout):
        raise DegenerateStructureError(f"Box has no layout: {box.value!r}")
    return box.value


def _check_box_layout(diagram: WiringDiagram) -> None:
    _box_layout(diagram)
    _check_nested_layouts(diagram)


def _check_nested_layouts(diagram: WiringDiagram) -> None:
    for box in diagram.boxes():
        _box_layout(box)
        if isinstance(box, WiringDiagram):
            _check_nested_layouts(box)
