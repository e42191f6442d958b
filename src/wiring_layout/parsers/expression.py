"""Parser for the wiring-layout expression DSL: hand-rolled recursive descent.

A document declares generators and gives one morphism term to lay out:

    %% comment
    ob A, B
    hom f : A -> B
    hom g : B -> A @ C
    expr f ; g ; (id(A) @ id(C))

``;`` is sequential composition and binds loosest; ``@`` (or ``⊗``) is the
monoidal product. Objects mentioned in a ``hom`` declaration are declared
implicitly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from wiring_layout.errors import ExpressionError, ParseError
from wiring_layout.syntax.expr import HomExpr, ObExpr, braid, compose, identity, munit, otimes, otimes_ob
from wiring_layout.syntax.presentation import Presentation

logger = logging.getLogger(__name__)

# ─── Tokens ──────────────────────────────────────────────────────────────────

_COMMENT_RE = re.compile(r"%%[^\n]*")
_WHITESPACE_RE = re.compile(r"[ \t]+")
_NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_']*")

_TENSOR_TOKENS = ("@", "⊗")
_ARROW_TOKENS = ("->", "→")
_RESERVED = {"ob", "hom", "expr", "id", "braid", "I"}


@dataclass
class Document:
    """A parsed DSL document: the generators and the term to lay out."""

    presentation: Presentation
    expr: HomExpr


@dataclass
class _Parser:
    """Stateful parser cursor over the input string."""

    src: str
    pos: int = 0
    presentation: Presentation = field(default_factory=Presentation)

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def consume(self, s: str) -> bool:
        if self.peek(s):
            self.pos += len(s)
            return True
        return False

    def consume_any(self, tokens: tuple[str, ...]) -> bool:
        return any(self.consume(token) for token in tokens)

    def match_re(self, pattern: re.Pattern[str]) -> str | None:
        m = pattern.match(self.src, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)
        return None

    def skip_ws(self) -> None:
        """Skip spaces/tabs and comments (not newlines)."""
        while self.match_re(_WHITESPACE_RE) or self.match_re(_COMMENT_RE):
            pass

    def at_line_end(self) -> bool:
        self.skip_ws()
        return self.eof() or _NEWLINE_RE.match(self.src, self.pos) is not None

    def error(self, message: str) -> ParseError:
        line = self.src.count("\n", 0, self.pos) + 1
        column = self.pos - (self.src.rfind("\n", 0, self.pos) + 1) + 1
        return ParseError(message, line, column)

    def expect(self, token: str) -> None:
        self.skip_ws()
        if not self.consume(token):
            raise self.error(f"Expected '{token}'")

    def expect_name(self) -> str:
        self.skip_ws()
        name = self.match_re(_NAME_RE)
        if name is None:
            raise self.error("Expected a name")
        return name

    def try_keyword(self, keyword: str) -> bool:
        """Consume ``keyword`` only if it is a whole word."""
        m = _NAME_RE.match(self.src, self.pos)
        if m and m.group(0) == keyword:
            self.pos = m.end()
            return True
        return False

    # ── Objects ───────────────────────────────────────────────────────────────

    def parse_ob_factor(self) -> ObExpr:
        name = self.expect_name()
        if name == "I":
            return munit()
        if name in _RESERVED:
            raise self.error(f"'{name}' is reserved")
        if not self.presentation.has_generator(name):
            return self.presentation.add_ob(name)
        gen = self.presentation.generator(name)
        if not isinstance(gen, ObExpr):
            raise self.error(f"'{name}' is a morphism, not an object")
        return gen

    def parse_ob(self) -> ObExpr:
        factors = [self.parse_ob_factor()]
        while True:
            self.skip_ws()
            if not self.consume_any(_TENSOR_TOKENS):
                break
            factors.append(self.parse_ob_factor())
        return otimes_ob(*factors)

    # ── Morphism terms ────────────────────────────────────────────────────────

    def parse_atom(self) -> HomExpr:
        self.skip_ws()
        start = self.pos
        if self.consume("("):
            term = self.parse_term()
            self.expect(")")
            return term
        if self.try_keyword("id"):
            self.expect("(")
            obj = self.parse_ob()
            self.expect(")")
            return identity(obj)
        if self.try_keyword("braid"):
            self.expect("(")
            a = self.parse_ob()
            self.expect(",")
            b = self.parse_ob()
            self.expect(")")
            return braid(a, b)
        name = self.expect_name()
        if not self.presentation.has_generator(name):
            self.pos = start
            raise self.error(f"Unknown morphism '{name}'")
        gen = self.presentation.generator(name)
        if not isinstance(gen, HomExpr):
            self.pos = start
            raise self.error(f"'{name}' is an object, not a morphism")
        return gen

    def parse_tensor(self) -> HomExpr:
        factors = [self.parse_atom()]
        while True:
            self.skip_ws()
            if not self.consume_any(_TENSOR_TOKENS):
                break
            factors.append(self.parse_atom())
        return otimes(*factors)

    def parse_term(self) -> HomExpr:
        self.skip_ws()
        start = self.pos
        factors = [self.parse_tensor()]
        while True:
            self.skip_ws()
            if not self.consume(";"):
                break
            factors.append(self.parse_tensor())
        try:
            return compose(*factors)
        except ExpressionError as e:
            self.pos = start
            raise self.error(str(e)) from e

    # ── Statements ────────────────────────────────────────────────────────────

    def parse_ob_decl(self) -> None:
        while True:
            name = self.expect_name()
            if name in _RESERVED:
                raise self.error(f"'{name}' is reserved")
            try:
                self.presentation.add_ob(name)
            except ExpressionError as e:
                raise self.error(str(e)) from e
            self.skip_ws()
            if not self.consume(","):
                break

    def parse_hom_decl(self) -> None:
        name = self.expect_name()
        if name in _RESERVED:
            raise self.error(f"'{name}' is reserved")
        self.expect(":")
        dom = self.parse_ob()
        self.skip_ws()
        if not self.consume_any(_ARROW_TOKENS):
            raise self.error("Expected '->'")
        codom = self.parse_ob()
        try:
            self.presentation.add_hom(name, dom, codom)
        except ExpressionError as e:
            raise self.error(str(e)) from e

    def parse_document(self) -> Document:
        expr: HomExpr | None = None
        while True:
            self.skip_ws()
            if self.eof():
                break
            if self.match_re(_NEWLINE_RE):
                continue
            if self.try_keyword("ob"):
                self.parse_ob_decl()
            elif self.try_keyword("hom"):
                self.parse_hom_decl()
            elif self.try_keyword("expr"):
                if expr is not None:
                    raise self.error("Only one 'expr' statement is allowed")
                expr = self.parse_term()
            else:
                raise self.error("Expected 'ob', 'hom' or 'expr'")
            if not self.at_line_end():
                raise self.error("Unexpected input")
        if expr is None:
            raise self.error("Missing 'expr' statement")
        logger.debug("Parsed %d generators", len(self.presentation.generators))
        return Document(presentation=self.presentation, expr=expr)


# ─── Public API ──────────────────────────────────────────────────────────────


def parse(src: str) -> Document:
    """Parse DSL text into a presentation and a morphism expression.

    Raises ParseError (a ValueError) on syntax or typing errors.
    """
    return _Parser(src=src).parse_document()
