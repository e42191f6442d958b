"""Symbolic expressions for objects and morphisms of a strict monoidal category.

Expressions are structurally similar to S-expressions: a kind tag plus a tuple
of arguments. Composition and monoidal products are kept in the associative
normal form ``(op, e1, e2, ...)`` where no ``ei`` is itself an application of
``op``. Monoidal products of objects additionally drop the unit, which is what
makes the category *strict*. No other equational reasoning happens here.
"""

from __future__ import annotations

from dataclasses import dataclass

from wiring_layout.errors import ExpressionError
from wiring_layout.syntax.types import HomKind, ObKind


@dataclass(frozen=True)
class ObExpr:
    kind: ObKind
    args: tuple = ()

    def __str__(self) -> str:
        return as_infix(self)


@dataclass(frozen=True)
class HomExpr:
    kind: HomKind
    args: tuple = ()

    def __str__(self) -> str:
        return as_infix(self)


# ─── Objects ─────────────────────────────────────────────────────────────────


def ob(name: str) -> ObExpr:
    """Basic (generating) object."""
    return ObExpr(ObKind.Generator, (name,))


def munit() -> ObExpr:
    return ObExpr(ObKind.Unit)


def ob_factors(obj: ObExpr) -> list[ObExpr]:
    """Basic objects of a monoidal product, in order. The unit has none."""
    if obj.kind == ObKind.Unit:
        return []
    if obj.kind == ObKind.Otimes:
        return list(obj.args)
    return [obj]


def otimes_ob(*objs: ObExpr) -> ObExpr:
    """Monoidal product of objects, in normal form."""
    factors: list[ObExpr] = []
    for obj in objs:
        factors.extend(ob_factors(obj))
    if not factors:
        return munit()
    if len(factors) == 1:
        return factors[0]
    return ObExpr(ObKind.Otimes, tuple(factors))


# ─── Morphisms ───────────────────────────────────────────────────────────────


def generator(name: str, dom: ObExpr, codom: ObExpr) -> HomExpr:
    """Basic (generating) morphism ``name : dom -> codom``."""
    return HomExpr(HomKind.Generator, (name, dom, codom))


def identity(obj: ObExpr) -> HomExpr:
    return HomExpr(HomKind.Id, (obj,))


def braid(a: ObExpr, b: ObExpr) -> HomExpr:
    """Symmetry ``a ⊗ b -> b ⊗ a``."""
    return HomExpr(HomKind.Braid, (a, b))


def _associate(kind: HomKind, exprs: tuple[HomExpr, ...]) -> HomExpr:
    terms: list[HomExpr] = []
    for expr in exprs:
        if expr.kind == kind:
            terms.extend(expr.args)
        else:
            terms.append(expr)
    if len(terms) == 1:
        return terms[0]
    return HomExpr(kind, tuple(terms))


def compose(*fs: HomExpr) -> HomExpr:
    """Sequential composition ``f ; g ; ...`` (diagrammatic order).

    Raises ExpressionError if consecutive morphisms are not composable.
    """
    if not fs:
        raise ExpressionError("compose requires at least one morphism")
    for f, g in zip(fs, fs[1:]):
        if codom(f) != dom(g):
            raise ExpressionError(
                f"Incompatible domains: {as_infix(f)} has codomain {as_infix(codom(f))}, "
                f"{as_infix(g)} has domain {as_infix(dom(g))}"
            )
    return _associate(HomKind.Compose, fs)


def otimes(*fs: HomExpr) -> HomExpr:
    """Monoidal product ``f ⊗ g ⊗ ...`` of morphisms."""
    if not fs:
        raise ExpressionError("otimes requires at least one morphism")
    return _associate(HomKind.Otimes, fs)


def generator_name(f: HomExpr) -> str:
    if f.kind != HomKind.Generator:
        raise ExpressionError(f"Not a generator: {as_sexpr(f)}")
    return f.args[0]


def dom(f: HomExpr) -> ObExpr:
    match f.kind:
        case HomKind.Generator:
            return f.args[1]
        case HomKind.Id:
            return f.args[0]
        case HomKind.Braid:
            return otimes_ob(f.args[0], f.args[1])
        case HomKind.Compose:
            return dom(f.args[0])
        case HomKind.Otimes:
            return otimes_ob(*(dom(arg) for arg in f.args))
    raise ExpressionError(f"Unknown morphism kind {f.kind}")


def codom(f: HomExpr) -> ObExpr:
    match f.kind:
        case HomKind.Generator:
            return f.args[2]
        case HomKind.Id:
            return f.args[0]
        case HomKind.Braid:
            return otimes_ob(f.args[1], f.args[0])
        case HomKind.Compose:
            return codom(f.args[-1])
        case HomKind.Otimes:
            return otimes_ob(*(codom(arg) for arg in f.args))
    raise ExpressionError(f"Unknown morphism kind {f.kind}")


# ─── Pretty-print ────────────────────────────────────────────────────────────

_SEXPR_HEADS: dict[object, str] = {
    HomKind.Id: "id",
    HomKind.Braid: "braid",
    HomKind.Compose: "compose",
    HomKind.Otimes: "otimes",
    ObKind.Otimes: "otimes",
    ObKind.Unit: "munit",
}

_INFIX_SYMBOLS: dict[object, str] = {
    HomKind.Compose: "⋅",
    HomKind.Otimes: "⊗",
    ObKind.Otimes: "⊗",
}


def as_sexpr(expr: ObExpr | HomExpr) -> str:
    """Format the expression as an S-expression.

    Not one-to-one: domains and codomains of generators are discarded.
    """
    if expr.kind in (ObKind.Generator, HomKind.Generator):
        return str(expr.args[0])
    parts = [_SEXPR_HEADS[expr.kind], *(as_sexpr(arg) for arg in expr.args)]
    if len(parts) == 1:
        return f"({parts[0]})"
    return "(" + " ".join(parts) + ")"


def as_infix(expr: ObExpr | HomExpr) -> str:
    """Format the expression in infix notation, using Unicode operators."""
    return _as_infix(expr)


def as_typed_infix(f: HomExpr) -> str:
    """Infix form of a morphism followed by its type, ``f : A → B``."""
    return f"{_as_infix(f)} : {_as_infix(dom(f))} → {_as_infix(codom(f))}"


def _as_infix(expr: ObExpr | HomExpr, paren: bool = False) -> str:
    if expr.kind in (ObKind.Generator, HomKind.Generator):
        return str(expr.args[0])
    if expr.kind == ObKind.Unit:
        return "I"
    symbol = _INFIX_SYMBOLS.get(expr.kind)
    if symbol is not None:
        result = symbol.join(_as_infix(arg, True) for arg in expr.args)
        return f"({result})" if paren else result
    return _SEXPR_HEADS[expr.kind] + "[" + ",".join(_as_infix(arg) for arg in expr.args) + "]"
