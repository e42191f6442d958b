"""Finite presentations: a named set of generating objects and morphisms."""

from __future__ import annotations

from wiring_layout.errors import ExpressionError
from wiring_layout.syntax.expr import HomExpr, ObExpr, generator, ob


class Presentation:
    """Generators of a free strict monoidal category, keyed by name.

    Objects and morphisms share one namespace; redefining a name is an error.
    """

    def __init__(self) -> None:
        self.generators: dict[str, ObExpr | HomExpr] = {}

    def _add(self, name: str, expr: ObExpr | HomExpr) -> None:
        if name in self.generators:
            raise ExpressionError(f"Name {name} already defined in presentation")
        self.generators[name] = expr

    def add_ob(self, name: str) -> ObExpr:
        expr = ob(name)
        self._add(name, expr)
        return expr

    def add_hom(self, name: str, dom: ObExpr, codom: ObExpr) -> HomExpr:
        expr = generator(name, dom, codom)
        self._add(name, expr)
        return expr

    def has_generator(self, name: str) -> bool:
        return name in self.generators

    def generator(self, name: str) -> ObExpr | HomExpr:
        try:
            return self.generators[name]
        except KeyError:
            raise ExpressionError(f"No generator named {name}") from None

    def obs(self) -> list[ObExpr]:
        return [g for g in self.generators.values() if isinstance(g, ObExpr)]

    def homs(self) -> list[HomExpr]:
        return [g for g in self.generators.values() if isinstance(g, HomExpr)]
