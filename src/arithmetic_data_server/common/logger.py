"""Package logger shared by the library, the web layer and the client."""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger: logging.Logger = logging.getLogger("arithmetic_data_server")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Calling it again only updates the level, so a handler is never attached twice.

    :param str level: Logging level name (e.g. "DEBUG", "INFO")

    :return: The configured package logger
    :rtype: logging.Logger
    """
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
