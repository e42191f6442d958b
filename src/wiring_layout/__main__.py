"""CLI entry point for wiring-layout."""

import logging
import sys

import click

from wiring_layout.config import LayoutOptions
from wiring_layout.layout.engine import layout_diagram
from wiring_layout.parsers.expression import parse
from wiring_layout.report import format_layout
from wiring_layout.syntax.types import Orientation

_ORIENTATION_MAP: dict[str, Orientation] = {
    "LR": Orientation.LeftToRight,
    "RL": Orientation.RightToLeft,
    "TD": Orientation.TopToBottom,
    "TB": Orientation.TopToBottom,
    "BT": Orientation.BottomToTop,
}

logger = logging.getLogger(__name__)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--orientation", "-d", "orientation", type=str, default="LR", help="Flow direction (LR, RL, TD, BT)")
@click.option("--base-box-size", "base_box_size", type=float, default=2.0, help="Size of a one-port box")
@click.option("--sequence-pad", "sequence_pad", type=float, default=2.0, help="Gap between composed boxes")
@click.option("--parallel-pad", "parallel_pad", type=float, default=1.0, help="Gap between tensored boxes and ports")
@click.option("--no-junctions", "no_junctions", is_flag=True, help="Do not draw copy/merge points as boxes")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log layout steps to stderr")
def main(
    input: str | None,
    orientation: str,
    base_box_size: float,
    sequence_pad: float,
    parallel_pad: float,
    no_junctions: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Lay out a morphism expression as a wiring diagram and print the geometry."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    key = orientation.upper()
    if key not in _ORIENTATION_MAP:
        click.echo(f"error: unknown orientation '{orientation}'; use LR, RL, TD, or BT", err=True)
        sys.exit(1)

    try:
        opts = LayoutOptions(
            orientation=_ORIENTATION_MAP[key],
            junctions=not no_junctions,
            base_box_size=base_box_size,
            sequence_pad=sequence_pad,
            parallel_pad=parallel_pad,
        )
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        document = parse(text)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    try:
        diagram = layout_diagram(document.expr, opts)
    except ValueError as e:
        click.echo(f"layout error: {e}", err=True)
        sys.exit(1)
    logger.debug("Laid out %d boxes", diagram.nboxes())

    rendered = format_layout(diagram)
    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
