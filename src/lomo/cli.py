# src/lomo/cli.py
from __future__ import annotations

import argparse
import os
import sys

import cv2

from lomo.errors import ArgumentParseError, LibraryError, LomoError, UsageError
from lomo.rt.engine import LomoProcessor
from lomo.rt.imagefile import load_image
from lomo.utils.config import read_config
from lomo.utils.logging import logger, set_verbose
from lomo.utils.params import Params, ParamStore
from lomo.utils.presets import apply_preset_to_params, load_preset_by_name, preset_names

ABOUT = "Lomography v1.0"


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of calling ``sys.exit(2)``."""

    def error(self, message):
        raise ArgumentParseError(message)


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    ap = _Parser(
        prog=prog,
        description=f"{ABOUT}: red tone curve and vignette with live sliders. "
                    "Press q to quit, s to save output.jpg and quit.",
        add_help=False,
    )
    ap.add_argument("filename", nargs="?", help="Picture file")
    ap.add_argument("-h", "--help", "-?", action="store_true", help="print this message")
    ap.add_argument("--preset", default=None, help="Initial slider values from a named YAML preset")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def _initial_params(preset_name: str | None) -> Params:
    p = Params()
    if not preset_name:
        return p
    preset = load_preset_by_name(preset_name)
    if preset is None:
        raise ArgumentParseError(f"Unknown preset '{preset_name}' (available: {', '.join(preset_names())})")
    logger.debug("Using preset %s", preset_name)
    try:
        return apply_preset_to_params(preset, p)
    except ValueError as e:
        raise ArgumentParseError(f"Invalid preset '{preset_name}': {e}") from e


def _launch_gui(processor: LomoProcessor, cfg: dict):
    from lomo.ui.app import run_gui
    return run_gui(processor, cfg)


def run(argv: list[str], prog: str) -> int:
    ap = build_parser(prog)
    args = ap.parse_args(argv)
    if args.help or not args.filename:
        raise UsageError(ap.format_help())
    set_verbose(args.verbose)

    cfg = read_config()
    params = _initial_params(args.preset)
    img = load_image(args.filename)
    proc = LomoProcessor(img, ParamStore(params))

    failure = _launch_gui(proc, cfg)
    if failure is not None:
        raise failure
    return 0


def main(argv: list[str] | None = None) -> int:
    prog = os.path.basename(sys.argv[0]) or "lomo"
    if argv is None:
        argv = sys.argv[1:]
    try:
        return run(argv, prog)
    except UsageError as e:
        print(e.message)
        return 1
    except LomoError as e:
        logger.debug("%s failed: %s", e.operation, e.message)
        print(f"Error: {prog}: {e.message}", file=sys.stderr)
        return 1
    except cv2.error as e:
        err = LibraryError.wrap(e)
        logger.debug("%s failed: %s", err.operation, err.message)
        print(f"Error: {prog}: {err.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
