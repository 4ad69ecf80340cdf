"""
Log setup for spliceannot runs.

Progress and diagnostics go to stderr through rich, since stdout may be the
annotated VCF itself. A plain-text copy can be kept with ``--log-file``.
"""

import logging
import time
from contextlib import contextmanager

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "console",
    "setup_logging",
    "timed",
]

LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Shared by the log handler, status spinner and CLI error messages
console = Console(stderr=True)


def setup_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """
    Install the stderr handler, plus a file handler when ``log_file`` is set.

    ``verbose`` switches to DEBUG, which logs every transcript hit and shows
    the source location of each message.
    """
    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=True,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        handlers.append(file_handler)

    # force=True replaces handlers left by an earlier call in the same process
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None):
    """
    Log the wall-clock time of a block at DEBUG level.

    Used around the GTF load::

        with timed("Loading GTF", logger):
            table = TranscriptTable.from_gtf(config.gtf_file)
    """
    log = logger or logging.getLogger(__name__)
    started = time.perf_counter()
    log.debug("%s...", operation)
    try:
        yield
    finally:
        log.debug("%s took %.3fs", operation, time.perf_counter() - started)
