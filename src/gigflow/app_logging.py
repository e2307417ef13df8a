"""Logging configuration helpers."""

import logging


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stream handler to the ``gigflow`` logger.

    Repeated calls only adjust the level, so building several apps in one
    process (as the tests do) never duplicates output.
    """
    logger = logging.getLogger("gigflow")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
