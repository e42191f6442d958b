"""Shared type definitions for wiring-layout.

Enums used across the expression model, the wiring-diagram IR and layout.
"""

from __future__ import annotations

from enum import Enum, auto


class Orientation(Enum):
    """Direction of sequential flow in a laid-out diagram."""

    LeftToRight = auto()
    RightToLeft = auto()
    TopToBottom = auto()
    BottomToTop = auto()

    @classmethod
    def default(cls) -> Orientation:
        return cls.LeftToRight

    @property
    def is_horizontal(self) -> bool:
        return self in (Orientation.LeftToRight, Orientation.RightToLeft)

    @property
    def is_positive(self) -> bool:
        return self in (Orientation.LeftToRight, Orientation.TopToBottom)

    @property
    def sign(self) -> int:
        return 1 if self.is_positive else -1


class ObKind(Enum):
    Generator = auto()  # A
    Unit = auto()  # I
    Otimes = auto()  # A ⊗ B


class HomKind(Enum):
    Generator = auto()  # f : A -> B
    Id = auto()  # id(A)
    Braid = auto()  # braid(A, B)
    Compose = auto()  # f ; g
    Otimes = auto()  # f ⊗ g


class PortKind(Enum):
    Input = auto()
    Output = auto()
