"""
captioncut.logging - Package logger setup for the CLI.

Log records go to stderr through rich so they never mix with the caption
tables printed on stdout. Chatty third-party loggers (litellm, the audio
decoders) stay at WARNING unless verbose mode asks for everything.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("captioncut")

NOISY_LOGGERS = ("LiteLLM", "litellm", "httpx", "audioread", "numba")


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the captioncut package.

    Safe to call more than once; the package handler is replaced, not stacked.

    Args:
        verbose: DEBUG for captioncut and its dependencies; otherwise WARNING
    """
    level = logging.DEBUG if verbose else logging.WARNING

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
