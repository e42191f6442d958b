"""Plain-text report of a laid-out wiring diagram."""

from __future__ import annotations

from typing import Any

from wiring_layout.ir.wiring import INPUT_ID, OUTPUT_ID, Port, WiringDiagram
from wiring_layout.layout.types import BoxLayout, PortLayout, Vector2D
from wiring_layout.syntax.expr import HomExpr, ObExpr, as_infix


def _fmt_vec(v: Vector2D) -> str:
    # adding 0.0 turns -0.0 into 0.0
    return f"({v.x + 0.0:g}, {v.y + 0.0:g})"


def _fmt_value(value: Any) -> str:
    if isinstance(value, (HomExpr, ObExpr)):
        return as_infix(value)
    return str(value)


def _fmt_port(kind: str, index: int, port: Any) -> str:
    if isinstance(port, PortLayout):
        return (
            f"    {kind}[{index}] {_fmt_value(port.value)} "
            f"at {_fmt_vec(port.position)} normal {_fmt_vec(port.normal)}"
        )
    return f"    {kind}[{index}] {_fmt_value(port)}"


def _fmt_endpoint(port: Port) -> str:
    if port.box == INPUT_ID:
        return f"in[{port.port}]"
    if port.box == OUTPUT_ID:
        return f"out[{port.port}]"
    return f"box {port.box}.{port.kind.name.lower()}[{port.port}]"


def format_layout(diagram: WiringDiagram) -> str:
    """Describe every box, port and wire of a laid-out diagram, one per line."""
    lines: list[str] = []
    if isinstance(diagram.value, BoxLayout):
        lines.append(f"diagram size {_fmt_vec(diagram.value.size)}")
    else:
        lines.append("diagram (no layout)")
    for i, port in enumerate(diagram.input_ports):
        lines.append(_fmt_port("in", i, port))
    for i, port in enumerate(diagram.output_ports):
        lines.append(_fmt_port("out", i, port))

    for v in diagram.box_ids():
        box = diagram.box(v)
        layout = box.value
        if isinstance(layout, BoxLayout):
            lines.append(
                f"box {v} {_fmt_value(layout.value)} "
                f"at {_fmt_vec(layout.position)} size {_fmt_vec(layout.size)}"
            )
        else:
            lines.append(f"box {v} {_fmt_value(layout)}")
        for i, port in enumerate(box.input_ports):
            lines.append(_fmt_port("in", i, port))
        for i, port in enumerate(box.output_ports):
            lines.append(_fmt_port("out", i, port))

    for wire in sorted(diagram.wires(), key=lambda w: (w.source.box, w.source.port, w.target.box, w.target.port)):
        lines.append(f"wire {_fmt_endpoint(wire.source)} -> {_fmt_endpoint(wire.target)}")
    return "\n".join(lines) + "\n"
