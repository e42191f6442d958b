"""Layout types shared by the layout engine and the report writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from wiring_layout.syntax.types import Orientation


@dataclass(frozen=True)
class Vector2D:
    """A 2D point or extent. Products with another vector are elementwise."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __mul__(self, other: float | Vector2D) -> Vector2D:
        if isinstance(other, Vector2D):
            return Vector2D(self.x * other.x, self.y * other.y)
        return Vector2D(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2D:
        return Vector2D(self.x / scalar, self.y / scalar)

    def __iter__(self):
        yield self.x
        yield self.y

    def emin(self, other: Vector2D) -> Vector2D:
        return Vector2D(min(self.x, other.x), min(self.y, other.y))

    def emax(self, other: Vector2D) -> Vector2D:
        return Vector2D(max(self.x, other.x), max(self.y, other.y))


def orient_vector(orientation: Orientation, primary: float | None = None, secondary: float = 0.0) -> Vector2D:
    """Map (primary, secondary) magnitudes onto (x, y) for the given orientation.

    With no arguments, returns the unit vector of forward sequential flow.
    """
    if primary is None:
        primary = orientation.sign
    if orientation.is_horizontal:
        return Vector2D(primary, secondary)
    return Vector2D(secondary, primary)


def secondary_component(orientation: Orientation, v: Vector2D) -> float:
    return v.y if orientation.is_horizontal else v.x


@dataclass
class BoxLayout:
    """Layout of a box: centre relative to its immediate container, and size."""

    value: Any = None
    position: Vector2D = field(default_factory=Vector2D)
    size: Vector2D = field(default_factory=Vector2D)

    @property
    def lower_corner(self) -> Vector2D:
        return self.position - self.size / 2

    @property
    def upper_corner(self) -> Vector2D:
        return self.position + self.size / 2


@dataclass(frozen=True)
class PortLayout:
    """Layout of a port: position relative to the box centre, outward unit normal."""

    value: Any
    position: Vector2D
    normal: Vector2D
