"""
logging_config.py
~~~~~~~~~~~~~~~~~
One place to set up log formatting for the API process and the Celery worker.
"""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def configure_logging(level: str = "INFO", logger: Optional[logging.Logger] = None) -> logging.Logger:
    """
    Attach a single stream handler with the project format to `logger`
    (the root logger by default). Safe to call more than once.
    """
    target = logger or logging.getLogger()
    target.setLevel(level.upper())

    for handler in list(target.handlers):
        if getattr(handler, "_tempsweep", False):
            target.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._tempsweep = True
    target.addHandler(handler)
    return target
