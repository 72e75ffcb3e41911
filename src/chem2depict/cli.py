"""
chem2depict command line.

Usage:
    chem2depict render "c1ccccc1O" --rotate 30 --svg phenol
    chem2depict render ~/structures/caffeine.mol --pdf caffeine
    chem2depict batch inputs.txt --out-dir depictions --format pdf
    chem2depict watch            # one input per line on stdin

render
    Load one input (SMILES, InChI, molfile, CML, name or path) and
    optionally export it. --svg / --pdf get their extension appended.
batch
    Load every non-empty line of a text file and export each success as
    <out-dir>/<line number>.<format>.
watch
    Read stdin line by line; each line replaces the current structure and
    the console view prints it. An empty line clears it.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import (
    COLOR_DEPICT_CONFIG,
    DEFAULT_DEPICT_CONFIG,
    INVERTED_DEPICT_CONFIG,
    DepictConfig,
)
from .core import StructureController

logger = logging.getLogger(__name__)


def setup_logger(log_level: str = "WARNING") -> logging.Logger:
    """Configure the package logger once and return it."""
    pkg_logger = logging.getLogger("chem2depict")
    pkg_logger.setLevel(getattr(logging, log_level.upper()))
    pkg_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    pkg_logger.addHandler(handler)
    return pkg_logger


class ConsoleView:
    """Prints the controller's structure every time the model changes."""

    def __init__(self, controller: StructureController, stream=None):
        self.controller = controller
        self.stream = stream or sys.stdout
        controller.add_view(self.update)

    def update(self) -> None:
        model = self.controller.model
        if model is None or model.is_empty:
            print("(empty)", file=self.stream)
            return
        print(model.summary(), file=self.stream)


def _config_from_args(args) -> DepictConfig:
    if args.color:
        return COLOR_DEPICT_CONFIG
    if args.inverted:
        return INVERTED_DEPICT_CONFIG
    return DEFAULT_DEPICT_CONFIG


def cmd_render(args) -> int:
    controller = StructureController(config=_config_from_args(args))
    ConsoleView(controller)

    if not controller.load_content(args.input):
        print(f"Could not interpret input: {controller.last_error or args.input}", file=sys.stderr)
        return 1

    if args.svg:
        out = controller.export_to_svg(args.svg, args.rotate)
        if out:
            print(f"Wrote {out}")
    if args.pdf:
        out = controller.export_to_pdf(args.pdf, args.rotate)
        if out:
            print(f"Wrote {out}")
    return 0 if controller.last_error is None else 1


def cmd_batch(args) -> int:
    controller = StructureController(config=_config_from_args(args))
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    export = controller.export_to_pdf if args.format == "pdf" else controller.export_to_svg

    logger.info("Exporting structures from %s", args.file)
    ok = failed = 0
    with open(args.file, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            result = controller.dispatch(line)
            if result.ok and export(out_dir / str(lineno), args.rotate):
                ok += 1
            else:
                failed += 1
                print(f"line {lineno}: {result.reason or controller.last_error}", file=sys.stderr)

    print(f"Exported {ok} structures to {out_dir} ({failed} failed).")
    return 0 if failed == 0 else 1


def cmd_watch(args) -> int:
    controller = StructureController(config=_config_from_args(args))
    ConsoleView(controller)
    for line in sys.stdin:
        if not controller.load_content(line):
            print(f"! {controller.last_error or 'could not interpret input'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    colors = common.add_mutually_exclusive_group()
    colors.add_argument("--color", action="store_true", help="colour atoms by element")
    colors.add_argument("--inverted", action="store_true", help="white on black")

    parser = argparse.ArgumentParser(
        prog="chem2depict",
        description="Depict chemical structures from SMILES, InChI, molfile, CML or names.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", parents=[common], help="load one input and export it")
    p_render.add_argument("input")
    p_render.add_argument("--svg", help="write an SVG file")
    p_render.add_argument("--pdf", help="write a PDF file")
    p_render.add_argument("--rotate", type=float, default=0.0, help="rotation in degrees (default 0)")
    p_render.set_defaults(func=cmd_render)

    p_batch = sub.add_parser("batch", parents=[common], help="export every line of a file")
    p_batch.add_argument("file")
    p_batch.add_argument("--out-dir", required=True)
    p_batch.add_argument("--format", choices=["svg", "pdf"], default="svg")
    p_batch.add_argument("--rotate", type=float, default=0.0, help="rotation in degrees (default 0)")
    p_batch.set_defaults(func=cmd_batch)

    p_watch = sub.add_parser("watch", parents=[common], help="load each stdin line as it arrives")
    p_watch.set_defaults(func=cmd_watch)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
