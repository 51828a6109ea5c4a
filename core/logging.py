import os
import sys
import logging
from logging.handlers import RotatingFileHandler


LOG_FORMAT = "%(asctime)s %(levelname)s %(filename)s:%(lineno)d %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "auto-archiver.log"

SLACK_LOGGERS = ("slack_sdk", "slack_bolt")


def level_for_verbosity(verbosity: int) -> int:
    """Verbosity 0 logs run-level events, anything higher adds per-channel detail"""
    return logging.DEBUG if verbosity >= 1 else logging.INFO


def configure_logging(verbosity: int = 0, logging_dir: str = "", slack_debug: bool = False):
    """Configure the root logger for a single archiver run"""
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if logging_dir:
        os.makedirs(logging_dir, exist_ok=True)
        handlers.append(RotatingFileHandler(
            os.path.join(logging_dir, LOG_FILE_NAME),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
        ))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level_for_verbosity(verbosity))

    # slack_sdk logs full request/response bodies at DEBUG
    for name in SLACK_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if slack_debug else logging.WARNING)

    return root
