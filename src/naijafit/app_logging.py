"""Logging configuration helpers."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route ``naijafit.*`` records to one stream handler at ``level``.

    Repeated calls only adjust the level.
    """
    logger = logging.getLogger("naijafit")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
