"""
Loggers for tmx_reader

Every module logs through a child of the 'tmx_reader' logger
(tmx_reader.tileset, tmx_reader.tiled_map). Importing the package installs
no handlers; only the tmx-reader command calls setup_logging, and an
application embedding the package configures logging its own way.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = 'tmx_reader'
LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Send tmx_reader messages to stderr for the command line tool.

    Only the package logger is touched, the root logger is left alone.
    Calling this again replaces the handler installed by the previous call.

    Parameters:
    -----------
    verbose : bool
        Also report INFO messages (tilesets loaded, files skipped)
    debug : bool
        Also report DEBUG messages; wins over verbose

    Returns:
    --------
    logging.Logger : the 'tmx_reader' logger
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, '_tmx_reader', False)]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._tmx_reader = True
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for one module, e.g. get_logger('tileset') -> tmx_reader.tileset."""
    return logging.getLogger(f'{PACKAGE_LOGGER}.{name}' if name else PACKAGE_LOGGER)
