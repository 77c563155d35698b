"""
Package logger
==============
A single ``dopecalc`` logger shared by every engine module. Records
propagate to the application's logging configuration; on its own the
package only installs a NullHandler. Callers may mirror records into a
file with enable_file_logging.
"""

import logging
from typing import Optional

__all__ = ('logger', 'enable_file_logging', 'disable_file_logging')

logger = logging.getLogger('dopecalc')
logger.addHandler(logging.NullHandler())

file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "dopecalc.log", level: int = logging.DEBUG) -> None:
    """Mirror engine log records into ``filename``."""
    global file_handler
    disable_file_logging()
    file_handler = logging.FileHandler(filename, mode='a')
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)


def disable_file_logging() -> None:
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
