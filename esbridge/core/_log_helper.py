import logging

logger = logging.getLogger("esbridge")


def warn(message: str, *args) -> None:
    logger.warning(message, *args)


def debug(message: str, *args) -> None:
    logger.debug(message, *args)
