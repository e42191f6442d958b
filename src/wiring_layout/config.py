"""Centralized configuration for wiring-layout."""

from __future__ import annotations

from dataclasses import dataclass, field

from wiring_layout.errors import ConfigurationError
from wiring_layout.syntax.types import Orientation

DEFAULT_BASE_BOX_SIZE: float = 2.0
DEFAULT_SEQUENCE_PAD: float = 2.0
DEFAULT_PARALLEL_PAD: float = 1.0


@dataclass(frozen=True)
class LayoutOptions:
    """Options for one layout run.

    ``junctions`` controls whether copy/merge points get explicit boxes. The
    expression language has no copy or merge morphisms yet, so it currently
    has no effect on the layout.
    """

    orientation: Orientation = field(default_factory=Orientation.default)
    junctions: bool = True
    base_box_size: float = DEFAULT_BASE_BOX_SIZE
    sequence_pad: float = DEFAULT_SEQUENCE_PAD
    parallel_pad: float = DEFAULT_PARALLEL_PAD

    def __post_init__(self) -> None:
        if not isinstance(self.orientation, Orientation):
            raise ConfigurationError(f"orientation must be an Orientation, got {self.orientation!r}")
        for name in ("base_box_size", "sequence_pad", "parallel_pad"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            object.__setattr__(self, name, float(value))
        if not self.base_box_size > 0:
            raise ConfigurationError(f"base_box_size must be positive, got {self.base_box_size}")
        if not self.sequence_pad >= 0:
            raise ConfigurationError(f"sequence_pad must be non-negative, got {self.sequence_pad}")
        if not self.parallel_pad >= 0:
            raise ConfigurationError(f"parallel_pad must be non-negative, got {self.parallel_pad}")
