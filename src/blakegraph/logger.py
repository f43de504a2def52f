import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

# -------------------- Configuration --------------------
ROOT_LOGGER_NAME = "blakegraph"

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H-%M-%S"

LOG_COLORS = {
    "DEBUG": "\033[36m",      # Cyan
    "INFO": "\033[32m",       # Green
    "WARNING": "\033[33m",    # Yellow
    "ERROR": "\033[31m",      # Red
    "CRITICAL": "\033[38;5;88m",  # Dark Red (ANSI 256-color)
}
RESET_COLOR = "\033[0m"

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


# -------------------- Formatters --------------------
class ColorFormatter(logging.Formatter):
    """Log formatter that wraps each message in the ANSI color of its level."""

    def format(self, record):
        color = LOG_COLORS.get(record.levelname, "")
        message = super().format(record)
        return f"{color}{message}{RESET_COLOR}" if color else message


plain_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def should_use_color():
    """Return True when stderr is a terminal that can show ANSI colors."""
    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


# -------------------- Logger Setup --------------------
def _setup_root_logger():
    """Attach the console handler to the package logger, once.

    Every logger returned by get_logger() is a child of this one and
    propagates to it, so handlers and level only need configuring here.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    root.setLevel(logging.INFO)
    root.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
                                 if should_use_color() else plain_formatter)
    root.addHandler(console_handler)
    return root


def get_logger(logger_name):
    """Return the blakegraph logger for a module, configuring output if needed.

    Parameters
    ----------
    logger_name:
        Short name of the requesting module, e.g. ``"store"``.

    Returns
    -------
    logging.Logger
        The ``blakegraph.<logger_name>`` logger.
    """
    _setup_root_logger()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{logger_name}")


def configure_logging(level=None, log_file=None):
    """Apply a log level and an optional rotating log file to the package logger.

    Calling this again with the same ``log_file`` does not add a second
    file handler.
    """
    root = _setup_root_logger()
    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)

    if log_file is not None:
        log_file = Path(log_file).resolve()
        for handler in root.handlers:
            if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_file:
                return root
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(plain_formatter)
        root.addHandler(file_handler)

    return root
