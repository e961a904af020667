import logging
import sys

from app.config import settings


def get_logger(name: str, prefix: str) -> logging.Logger:
    """
    Return the named logger, attaching a stdout handler with a `[PREFIX]`
    formatter the first time it is requested. Level comes from settings.LOG_LEVEL.
    """
    log = logging.getLogger(name)
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(f"[{prefix}] %(levelname)s %(message)s"))
        log.addHandler(h)
    return log
