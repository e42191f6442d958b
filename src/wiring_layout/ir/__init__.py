"""Intermediate representation: wiring diagrams."""

from wiring_layout.ir.wiring import (
    INPUT_ID,
    OUTPUT_ID,
    AbstractBox,
    Box,
    Port,
    Wire,
    WiringDiagram,
    braid_diagram,
    compose,
    id_diagram,
    otimes,
    singleton_diagram,
    substitute,
    to_wiring_diagram,
)

__all__ = [
    "AbstractBox",
    "Box",
    "INPUT_ID",
    "OUTPUT_ID",
    "Port",
    "Wire",
    "WiringDiagram",
    "braid_diagram",
    "compose",
    "id_diagram",
    "otimes",
    "singleton_diagram",
    "substitute",
    "to_wiring_diagram",
]
