import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(debug: bool = False) -> logging.Logger:
    """Route fycal's log records to stderr through rich."""
    logger = logging.getLogger("fycal")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=debug,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    return logger
