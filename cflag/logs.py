"""
Debug logging for cflag.

- DEBUG: the default verbosity, read once from the CFLAG_DEBUG environment
  variable when the package is imported. Binders copy it at construction
  (unless given debug=...) so nothing process-wide is mutated afterwards.
- getlogger(name, debug): a logger under the "cflag" namespace. With debug on,
  the logger is lowered to DEBUG and a rich handler on stderr is attached once.
  With debug off, both are undone, so a reused name never inherits a previous
  owner's verbosity.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import envbool

DEBUG = envbool("CFLAG_DEBUG")


def getlogger(name, debug=False, /):
    logger = logging.getLogger("cflag" if not name else "cflag." + name)
    handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
    if debug:
        logger.setLevel(logging.DEBUG)
        if not handlers:
            logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    else:
        logger.setLevel(logging.NOTSET)
        for handler in handlers:
            logger.removeHandler(handler)
    return logger


__all__ = (
    "DEBUG",
    "getlogger",
)
