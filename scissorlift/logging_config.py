"""Log output for the CLI and the HTTP service (stderr, optionally a file)."""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """Route the 'scissorlift' logger to stderr and, if given, to log_file.

    Safe to call repeatedly; earlier handlers are replaced, not stacked.
    stdout stays reserved for reports and --json output.
    """
    logger = logging.getLogger("scissorlift")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
