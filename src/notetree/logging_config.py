"""Logging configuration for notetree."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure loguru: DEBUG when verbose, WARNING when quiet, INFO otherwise.

    Debug lines carry the emitting module, which is where per-level and
    per-stub decisions of the tree builder are logged.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format="{level.icon} {name}: {message}")
        return
    logger.add(sys.stderr, level="WARNING" if quiet else "INFO", format="{level.icon} {message}")
