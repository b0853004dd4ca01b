"""Centralized logging configuration for bucketsync.

Provides coloured console output via *colorama*, ``--verbose`` /
``--quiet`` level selection, and grouped output for CI runners.

Usage::

    from bucketsync.utils.logger import get_logger, log_group

    log = get_logger(__name__)
    with log_group("Upload files"):
        log.info("Uploaded file %s", key)
    log.warning("Retrying upload")
    log.debug("Raw page: %s", page)  # only shown with --verbose
"""
import logging
import os
import sys
from contextlib import contextmanager

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging", "log_group", "report_failure", "running_in_github_actions"]

# ---------------------------------------------------------------------------
# Custom formatter that injects colorama colours per level
# ---------------------------------------------------------------------------

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColouredFormatter(logging.Formatter):
    """Formatter that prepends coloured level tags to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        reset = Style.RESET_ALL
        level_tag = record.levelname

        msg = super().format(record)
        return f"{colour}[{level_tag}]{reset} {msg}"


# ---------------------------------------------------------------------------
# Module-level setup
# ---------------------------------------------------------------------------

_ROOT_LOGGER_NAME = "bucketsync"
_configured = False


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the root *bucketsync* logger.

    Call once during CLI bootstrap (typically in ``main()``).

    Args:
        verbose: If *True*, set level to ``DEBUG``.
        quiet: If *True*, set level to ``WARNING`` (overrides *verbose*).
    """
    global _configured  # noqa: PLW0603

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColouredFormatter("%(message)s"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(level)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the *bucketsync* namespace.

    If :func:`setup_logging` has not been called yet, a default
    ``INFO``-level configuration is applied automatically.

    Args:
        name: Typically ``__name__`` of the calling module.

    Returns:
        A :class:`logging.Logger` instance.
    """
    if not _configured:
        setup_logging()

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


# ---------------------------------------------------------------------------
# CI execution-log sink
# ---------------------------------------------------------------------------

def running_in_github_actions() -> bool:
    """Return True when the process runs inside a GitHub Actions job."""
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def _escape_command_data(message: str) -> str:
    # Workflow commands are line based; percent and newlines must be encoded.
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


@contextmanager
def log_group(title: str):
    """Group every log line emitted inside the block under *title*.

    Under GitHub Actions this emits ``::group::`` / ``::endgroup::``
    workflow commands so the runner folds the output; elsewhere a
    coloured section header is printed instead.
    """
    if running_in_github_actions():
        print(f"::group::{_escape_command_data(title)}", flush=True)
        try:
            yield
        finally:
            print("::endgroup::", flush=True)
        return

    logging.getLogger(_ROOT_LOGGER_NAME).info(f"{Style.BRIGHT}▸ {title}{Style.RESET_ALL}")
    yield


def report_failure(message: str) -> None:
    """Report the fatal error of a run to the invoking environment."""
    get_logger(__name__).error(message)
    if running_in_github_actions():
        print(f"::error::{_escape_command_data(message)}", flush=True)
