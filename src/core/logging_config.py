"""
Logging setup for hosts embedding the engine.

Modules only ever create their own logger with logging.getLogger(__name__). Nothing gets configured on import:
call configure_logging() once from the host application if you want the output on stderr.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
ROOT_LOGGER_NAME = "src"
HANDLER_NAME = "clone_chess_stream"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the package logger (calling this twice does not duplicate output)."""
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)
    if not any(
        handler.get_name() == HANDLER_NAME for handler in package_logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger
