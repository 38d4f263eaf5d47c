from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import load_config
from .exceptions import ConfigError
from .logging_config import configure_logging
from .rng import coerce_seed

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rogue-pursuit",
        description="Rogue Pursuit - find the prize box before the pursuer catches you",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--seed", default=None, help="Master seed (int or string) for a reproducible dungeon")
    parser.add_argument("--max-inputs", type=int, default=None, help="Headless: stop after N key inputs")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    seed = coerce_seed(args.seed)
    if seed is not None:
        config = replace(config, seed=seed)

    # Honor CLI over env vars
    if args.gui:
        os.environ["RP_GUI"] = "1"
        os.environ.pop("RP_HEADLESS", None)
        return run_gui(config=config)

    if args.headless:
        os.environ["RP_HEADLESS"] = "1"
        os.environ.pop("RP_GUI", None)
        return run_headless(config=config, max_inputs=args.max_inputs)

    return run_auto(config=config, max_inputs=args.max_inputs)


if __name__ == "__main__":
    sys.exit(main())
