"""Wiring diagram IR: boxes, ports and wires stored in a networkx MultiDiGraph.

Nodes of the underlying graph are box ids. Two reserved ids, ``INPUT_ID`` and
``OUTPUT_ID``, stand for the diagram's own outer boundary: the diagram's input
ports are the *output* ports of the input node, and vice versa, so every wire
runs from an output port to an input port.

A ``WiringDiagram`` is itself a box (it has a ``value`` and input/output port
lists), so diagrams nest. ``substitute`` splices nested diagrams back into
their parent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import networkx as nx

from wiring_layout.errors import DegenerateStructureError
from wiring_layout.syntax.expr import HomExpr, codom, dom, ob_factors
from wiring_layout.syntax.types import HomKind, PortKind

INPUT_ID: int = -2
OUTPUT_ID: int = -1


@dataclass
class Box:
    """An atomic box with a payload and ordered input/output ports."""

    value: Any
    input_ports: list
    output_ports: list


@dataclass(frozen=True)
class Port:
    """A port on a box: (box id, kind, index)."""

    box: int
    kind: PortKind
    port: int


@dataclass(frozen=True)
class Wire:
    source: Port
    target: Port


class WiringDiagram:
    """A directed wiring diagram, possibly nested inside another one as a box."""

    def __init__(self, inputs: Iterable = (), outputs: Iterable = (), value: Any = None) -> None:
        self.value = value
        self.input_ports: list = list(inputs)
        self.output_ports: list = list(outputs)
        self.graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self.graph.add_node(INPUT_ID)
        self.graph.add_node(OUTPUT_ID)
        self._next_id = 0

    def __repr__(self) -> str:
        return (
            f"WiringDiagram(inputs={len(self.input_ports)}, outputs={len(self.output_ports)}, "
            f"boxes={self.nboxes()}, wires={self.nwires()})"
        )

    # ── Boxes ─────────────────────────────────────────────────────────────────

    def add_box(self, box: Box | WiringDiagram) -> int:
        v = self._next_id
        self._next_id += 1
        self.graph.add_node(v, box=box)
        return v

    def add_boxes(self, boxes: Iterable[Box | WiringDiagram]) -> list[int]:
        return [self.add_box(box) for box in boxes]

    def box(self, v: int) -> Box | WiringDiagram:
        if v < 0 or v not in self.graph:
            raise KeyError(f"No box with id {v}")
        return self.graph.nodes[v]["box"]

    def box_ids(self) -> list[int]:
        return [v for v in self.graph.nodes if v >= 0]

    def boxes(self) -> list[Box | WiringDiagram]:
        return [self.graph.nodes[v]["box"] for v in self.box_ids()]

    def nboxes(self) -> int:
        return self.graph.number_of_nodes() - 2

    def rem_box(self, v: int) -> None:
        """Remove a box along with every wire attached to it."""
        self.box(v)
        self.graph.remove_node(v)

    # ── Wires ─────────────────────────────────────────────────────────────────

    def _port_count(self, port: Port) -> int:
        if port.box == INPUT_ID:
            return len(self.input_ports) if port.kind == PortKind.Output else 0
        if port.box == OUTPUT_ID:
            return len(self.output_ports) if port.kind == PortKind.Input else 0
        if port.box not in self.graph:
            return 0
        box = self.box(port.box)
        return len(box.input_ports if port.kind == PortKind.Input else box.output_ports)

    def _check_wire(self, wire: Wire) -> None:
        if wire.source.kind != PortKind.Output or wire.target.kind != PortKind.Input:
            raise DegenerateStructureError(f"Wire must run from an output to an input port: {wire}")
        for port in (wire.source, wire.target):
            if not 0 <= port.port < self._port_count(port):
                raise DegenerateStructureError(f"Wire endpoint {port} does not exist")

    def add_wire(self, wire: Wire) -> None:
        self._check_wire(wire)
        self.graph.add_edge(wire.source.box, wire.target.box, key=wire, wire=wire)

    def add_wires(self, wires: Iterable[Wire]) -> None:
        wires = list(wires)
        for wire in wires:
            self._check_wire(wire)
        for wire in wires:
            self.graph.add_edge(wire.source.box, wire.target.box, key=wire, wire=wire)

    def wires(self) -> list[Wire]:
        return [data["wire"] for _, _, data in self.graph.edges(data=True)]

    def nwires(self) -> int:
        return self.graph.number_of_edges()

    def in_wires(self, v: int, port: int | None = None) -> list[Wire]:
        """Wires ending at box ``v`` (optionally at one of its input ports)."""
        return [
            data["wire"]
            for _, _, data in self.graph.in_edges(v, data=True)
            if port is None or data["wire"].target.port == port
        ]

    def out_wires(self, v: int, port: int | None = None) -> list[Wire]:
        """Wires starting at box ``v`` (optionally at one of its output ports)."""
        return [
            data["wire"]
            for _, _, data in self.graph.out_edges(v, data=True)
            if port is None or data["wire"].source.port == port
        ]


AbstractBox = Box | WiringDiagram


# ─── Constructors ────────────────────────────────────────────────────────────


def _outer_input(i: int) -> Port:
    return Port(INPUT_ID, PortKind.Output, i)


def _outer_output(i: int) -> Port:
    return Port(OUTPUT_ID, PortKind.Input, i)


def singleton_diagram(box: AbstractBox, inputs: Iterable | None = None, outputs: Iterable | None = None) -> WiringDiagram:
    """Diagram containing a single box, each of its ports wired to the boundary.

    The diagram's own ports default to the box's ports.
    """
    inputs = list(box.input_ports if inputs is None else inputs)
    outputs = list(box.output_ports if outputs is None else outputs)
    if len(inputs) != len(box.input_ports) or len(outputs) != len(box.output_ports):
        raise DegenerateStructureError("Singleton diagram ports must match the box's ports")
    diagram = WiringDiagram(inputs, outputs)
    v = diagram.add_box(box)
    diagram.add_wires(Wire(_outer_input(i), Port(v, PortKind.Input, i)) for i in range(len(inputs)))
    diagram.add_wires(Wire(Port(v, PortKind.Output, i), _outer_output(i)) for i in range(len(outputs)))
    return diagram


def id_diagram(ports: Iterable) -> WiringDiagram:
    ports = list(ports)
    diagram = WiringDiagram(ports, ports)
    diagram.add_wires(Wire(_outer_input(i), _outer_output(i)) for i in range(len(ports)))
    return diagram


def braid_diagram(ports1: Iterable, ports2: Iterable) -> WiringDiagram:
    """Diagram crossing the wires of ``ports1`` over those of ``ports2``."""
    ports1, ports2 = list(ports1), list(ports2)
    m, n = len(ports1), len(ports2)
    diagram = WiringDiagram(ports1 + ports2, ports2 + ports1)
    diagram.add_wires(Wire(_outer_input(i), _outer_output(n + i)) for i in range(m))
    diagram.add_wires(Wire(_outer_input(m + j), _outer_output(j)) for j in range(n))
    return diagram


def compose(d1: WiringDiagram, d2: WiringDiagram, unsubstituted: bool = False) -> WiringDiagram:
    """Sequential composition: outputs of ``d1`` feed inputs of ``d2``.

    With ``unsubstituted=True`` the operands stay in the result as nested boxes
    (ids 0 and 1); otherwise they are spliced in.
    """
    if len(d1.output_ports) != len(d2.input_ports):
        raise DegenerateStructureError(
            f"Cannot compose: {len(d1.output_ports)} outputs do not match {len(d2.input_ports)} inputs"
        )
    diagram = WiringDiagram(d1.input_ports, d2.output_ports)
    v1, v2 = diagram.add_box(d1), diagram.add_box(d2)
    diagram.add_wires(Wire(_outer_input(i), Port(v1, PortKind.Input, i)) for i in range(len(d1.input_ports)))
    diagram.add_wires(
        Wire(Port(v1, PortKind.Output, i), Port(v2, PortKind.Input, i)) for i in range(len(d1.output_ports))
    )
    diagram.add_wires(Wire(Port(v2, PortKind.Output, i), _outer_output(i)) for i in range(len(d2.output_ports)))
    if not unsubstituted:
        substitute(diagram, [v1, v2])
    return diagram


def otimes(d1: WiringDiagram, d2: WiringDiagram, unsubstituted: bool = False) -> WiringDiagram:
    """Parallel (monoidal) product: ``d1`` above ``d2``, ports concatenated."""
    m_in, m_out = len(d1.input_ports), len(d1.output_ports)
    diagram = WiringDiagram(d1.input_ports + d2.input_ports, d1.output_ports + d2.output_ports)
    v1, v2 = diagram.add_box(d1), diagram.add_box(d2)
    diagram.add_wires(Wire(_outer_input(i), Port(v1, PortKind.Input, i)) for i in range(m_in))
    diagram.add_wires(Wire(_outer_input(m_in + i), Port(v2, PortKind.Input, i)) for i in range(len(d2.input_ports)))
    diagram.add_wires(Wire(Port(v1, PortKind.Output, i), _outer_output(i)) for i in range(m_out))
    diagram.add_wires(
        Wire(Port(v2, PortKind.Output, i), _outer_output(m_out + i)) for i in range(len(d2.output_ports))
    )
    if not unsubstituted:
        substitute(diagram, [v1, v2])
    return diagram


def substitute(diagram: WiringDiagram, vs: Iterable[int]) -> WiringDiagram:
    """Replace each box ``v`` in ``vs`` (which must hold a WiringDiagram) by its contents.

    The sub-diagram's boxes are copied into ``diagram`` and its wires are joined
    with the wires attached to the placeholder. Mutates and returns ``diagram``.
    """
    vs = list(vs)
    for v in vs:
        sub = diagram.box(v)
        if not isinstance(sub, WiringDiagram):
            raise DegenerateStructureError(f"Box {v} does not hold a wiring diagram")
    for v in vs:
        _substitute_one(diagram, v)
    return diagram


def _substitute_one(diagram: WiringDiagram, v: int) -> None:
    sub = diagram.box(v)
    mapping = {u: diagram.add_box(sub.box(u)) for u in sub.box_ids()}

    new_wires: list[Wire] = []
    for wire in sub.wires():
        if wire.source.box == INPUT_ID:
            sources = [w.source for w in diagram.in_wires(v, wire.source.port)]
        else:
            sources = [Port(mapping[wire.source.box], wire.source.kind, wire.source.port)]
        if wire.target.box == OUTPUT_ID:
            targets = [w.target for w in diagram.out_wires(v, wire.target.port)]
        else:
            targets = [Port(mapping[wire.target.box], wire.target.kind, wire.target.port)]
        new_wires.extend(Wire(s, t) for s in sources for t in targets)

    diagram.rem_box(v)
    diagram.add_wires(new_wires)


def to_wiring_diagram(expr: HomExpr) -> WiringDiagram:
    """Convert a morphism expression into a wiring diagram.

    Generator boxes carry the generator expression as their value; ports are
    the basic objects of the domain and codomain.
    """
    match expr.kind:
        case HomKind.Generator:
            return singleton_diagram(Box(expr, ob_factors(dom(expr)), ob_factors(codom(expr))))
        case HomKind.Id:
            return id_diagram(ob_factors(expr.args[0]))
        case HomKind.Braid:
            return braid_diagram(ob_factors(expr.args[0]), ob_factors(expr.args[1]))
        case HomKind.Compose:
            result = to_wiring_diagram(expr.args[0])
            for arg in expr.args[1:]:
                result = compose(result, to_wiring_diagram(arg))
            return result
        case HomKind.Otimes:
            result = to_wiring_diagram(expr.args[0])
            for arg in expr.args[1:]:
                result = otimes(result, to_wiring_diagram(arg))
            return result
    raise DegenerateStructureError(f"Unknown morphism kind {expr.kind}")
