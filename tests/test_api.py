"""Tests for the top-level API and the plain-text report."""

import pytest

from wiring_layout import (
    ConfigurationError,
    LayoutOptions,
    Orientation,
    format_layout,
    layout_diagram,
    layout_dsl,
)
from wiring_layout.syntax import braid, generator, ob

A, B = ob("A"), ob("B")


def test_layout_dsl_tensor():
    d = layout_dsl("hom f : A -> B\nhom k : B -> A\nexpr f @ k\n")
    assert d.nboxes() == 2
    assert (d.value.size.x, d.value.size.y) == (2, 5)


def test_layout_dsl_options():
    d = layout_dsl("hom f : A -> B\nexpr f\n", orientation=Orientation.TopToBottom, base_box_size=4)
    assert (d.value.size.x, d.value.size.y) == (4, 4)
    assert (d.input_ports[0].position.x, d.input_ports[0].position.y) == (0, -2)


def test_layout_options_validation():
    with pytest.raises(ConfigurationError):
        LayoutOptions(orientation="LR")
    with pytest.raises(ConfigurationError):
        LayoutOptions(sequence_pad=-0.5)
    with pytest.raises(ConfigurationError):
        LayoutOptions(base_box_size="2")
    opts = LayoutOptions(base_box_size=3)
    assert opts.base_box_size == 3.0
    assert opts.junctions is True


def test_layout_options_defaults():
    opts = LayoutOptions()
    assert opts.orientation == Orientation.default() == Orientation.LeftToRight
    assert (opts.base_box_size, opts.sequence_pad, opts.parallel_pad) == (2.0, 2.0, 1.0)


def test_format_layout():
    f = generator("f", A, B)
    report = format_layout(layout_diagram(f))
    lines = report.splitlines()
    assert lines[0] == "diagram size (2, 2)"
    assert "    in[0] A at (-1, 0) normal (-1, 0)" in lines
    assert "box 0 f at (0, 0) size (2, 2)" in lines
    assert "wire in[0] -> box 0.input[0]" in lines
    assert "wire box 0.output[0] -> out[0]" in lines


def test_format_pure_wiring():
    report = format_layout(layout_diagram(braid(A, B)))
    assert "wire in[0] -> out[1]" in report
    assert "wire in[1] -> out[0]" in report
