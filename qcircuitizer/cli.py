"""Command-line entry point: render a recorded event trace.

Example::

    qcircuitizer -i teleport.json -f ascii -o teleport.txt
    qcircuitizer -i teleport.json -f directive --annotate-conditioned
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from .config import DrawerConfig
from .drawer import CircuitDrawer
from .events import replay
from .exceptions import CircuitizerError
from .glyphs import BoxGlyphs, DirectiveGlyphs, GlyphSet
from .io import load_trace
from .logging import configure_logging, get_logger

logger = get_logger(__name__)

OUTPUT_FORMATS = ("ascii", "directive")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qcircuitizer",
        description="Render a recorded circuit event trace as a text diagram.",
    )
    parser.add_argument(
        "-i", "--input-file", required=True, help="JSON event trace to render."
    )
    parser.add_argument(
        "-o",
        "--output-file",
        default=None,
        help="Where to write the diagram. Prints to stdout when omitted.",
    )
    parser.add_argument(
        "-f",
        "--output-format",
        choices=OUTPUT_FORMATS,
        default="ascii",
        help="Box-drawing diagram (ascii) or one statement per event (directive).",
    )
    parser.add_argument(
        "--annotate-conditioned",
        action="store_true",
        help="Mark gates drawn inside classically conditioned regions.",
    )
    parser.add_argument(
        "--mark-collapsed",
        action="store_true",
        help="Draw measured wires with a double line until they are reset.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
    )
    return parser


def _glyphs_for(output_format: str) -> GlyphSet:
    if output_format == "directive":
        return DirectiveGlyphs()
    return BoxGlyphs()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    # Flags can only switch options on; the environment supplies the rest.
    config = DrawerConfig.from_env()
    config = replace(
        config,
        annotate_conditioned=config.annotate_conditioned or args.annotate_conditioned,
        mark_collapsed=config.mark_collapsed or args.mark_collapsed,
    )
    drawer = CircuitDrawer(glyphs=_glyphs_for(args.output_format), config=config)

    try:
        events = load_trace(args.input_file)
        replay(events, drawer)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 2
    except CircuitizerError as e:
        logger.error("could not render %s: %s", args.input_file, e)
        return 1

    if args.output_file is None:
        sys.stdout.write(drawer.render() + "\n")
    else:
        drawer.write_to_file(args.output_file)
    return 0


__all__ = ["build_parser", "main"]
