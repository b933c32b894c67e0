"""
Console diagnostics for commandeer.

Every module logs through logging.getLogger(__name__) under the "commandeer"
logger, which only carries a NullHandler until a host opts in with
configure(). Records are debug-level: definitions built, duplicated
subcommands replaced, dispatch start and outcome.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler


def configure(level=logging.DEBUG, /, *, colorful=True, stderr=True):
    """
    Route commandeer records to a rich console handler.

    Parameters
    - level: int | str
      Threshold for the "commandeer" logger (e.g., logging.DEBUG or "INFO").
    - colorful: bool
      Keep rich colors; False strips them.
    - stderr: bool
      Write to stderr (default) instead of stdout.

    Calling configure() again replaces the handler it installed previously.

    Returns
    - logging.Logger: the configured "commandeer" logger.
    """
    logger = logging.getLogger("commandeer")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=stderr, no_color=not colorful),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = (
    "configure",
)
