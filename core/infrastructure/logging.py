"""
Logging infrastructure.

One formatter for the whole service; module loggers inherit it.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install the service log format on the root logger.

    Safe to call more than once (the first handler is reused).

    Args:
        level: Root log level name
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.setLevel(level.upper())
