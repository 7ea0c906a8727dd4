"""Logging setup for the command line."""

import logging
import os

DEBUG_ENV = "MIRRORSEEK_DEBUG"


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger; DEBUG when verbose or MIRRORSEEK_DEBUG=true."""
    debug = verbose or os.environ.get(DEBUG_ENV, "").lower() == "true"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
