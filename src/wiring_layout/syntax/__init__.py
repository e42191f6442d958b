"""Expression model: objects, morphisms and presentations."""

from wiring_layout.syntax.expr import (
    HomExpr,
    ObExpr,
    as_infix,
    as_sexpr,
    as_typed_infix,
    braid,
    codom,
    compose,
    dom,
    generator,
    generator_name,
    identity,
    munit,
    ob,
    ob_factors,
    otimes,
    otimes_ob,
)
from wiring_layout.syntax.presentation import Presentation
from wiring_layout.syntax.types import HomKind, ObKind, Orientation, PortKind

__all__ = [
    "HomExpr",
    "HomKind",
    "ObExpr",
    "ObKind",
    "Orientation",
    "PortKind",
    "Presentation",
    "as_infix",
    "as_sexpr",
    "as_typed_infix",
    "braid",
    "codom",
    "compose",
    "dom",
    "generator",
    "generator_name",
    "identity",
    "munit",
    "ob",
    "ob_factors",
    "otimes",
    "otimes_ob",
]
