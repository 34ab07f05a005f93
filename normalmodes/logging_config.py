"""
Logging Configuration
Console (and optional file) output for the 'normalmodes' logger.

The library modules only create loggers.  Scripts that want to see which
families are being run and which modes fail the Rayleigh-quotient check call
:func:`setup_logging` once.
"""
import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Marks handlers installed here, so a second call replaces only those
_HANDLER_ATTR = '_normalmodes_handler'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach handlers to the 'normalmodes' logger and return it.

    Args:
        level: Logging level, e.g. logging.DEBUG to also see control files.
        log_file: Optional path; the file is overwritten.
        stream: Console stream, stdout by default.
    """
    logger = logging.getLogger("normalmodes")
    logger.setLevel(level)
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_ATTR, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)
    return logger
