"""Logging setup for weekflow CLI commands."""

import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(filename)s:%(lineno)d - %(message)s"


def setup_logging(log: str, module_name: str = __name__) -> logging.Logger:
    """Send weekflow log records to stderr at the level chosen with --log.

    ``none`` still reports warnings, so a date substituted by the
    ``fallback`` policy is never silent; ``INFO`` and ``DEBUG`` add
    progressively more detail.

    Args:
        log: Value of the --log CLI option.  One of "none", "INFO", "DEBUG"
             (case-insensitive).
        module_name: The ``__name__`` of the calling module.

    Returns:
        Logger for the calling module.
    """
    level_name = log.upper()
    log_level = logging.WARNING if level_name == "NONE" else getattr(logging, level_name)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT if log_level < logging.WARNING else "[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    logging.getLogger("weekflow").setLevel(log_level)

    module_logger = logging.getLogger(module_name)
    module_logger.info("Logging enabled at %s level", level_name)
    return module_logger
