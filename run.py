"""
BattleText — run.py
Command-line entry point: narrates a battle log from one player's side.

    python run.py battle.log --perspective 1
    cat battle.log | python run.py -
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure we can import battletext packages
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

from battletext.config import RendererConfig, load_config
from battletext.renderer import Renderer

logger = logging.getLogger("battletext")


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="battletext",
        description="Turn a battle protocol log into readable battle text.",
    )
    parser.add_argument("log", help="protocol log file, or - for stdin")
    parser.add_argument(
        "-p", "--perspective", type=int, choices=(0, 1), default=None,
        help="narrate as player 1 (0) or player 2 (1)",
    )
    parser.add_argument("-c", "--config", type=Path, help="TOML file with a [renderer] table")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else RendererConfig()
        if args.log == "-":
            buffer = sys.stdin.read()
        else:
            buffer = Path(args.log).read_text(encoding="utf-8")
        renderer = Renderer(perspective=args.perspective, config=config)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(renderer.consume(buffer))
    return 0


if __name__ == "__main__":
    sys.exit(main())
