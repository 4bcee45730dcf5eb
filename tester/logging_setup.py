"""Central logging configuration for the tester runtime.

Applies a root stdout handler so all module loggers emit without per-module
setup, and avoids duplicate handlers when called more than once.
"""
from __future__ import annotations
import copy
import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        },
        "report": {
            "format": "%(levelname)s:%(name)s:%(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
        "report_console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "report",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "tester.report": {"level": "INFO", "handlers": ["report_console"], "propagate": False},
        "httpx": {"level": "WARNING", "handlers": ["console"], "propagate": False},
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Configure runtime-wide logging once.

    The ``tester`` logger always takes the requested level. Handlers are only
    installed when the root logger has none; pytest, behave or an embedding
    host that configured it keeps its own output.
    """
    logging.getLogger("tester").setLevel(level)
    root = logging.getLogger()
    if root.handlers:
        return
    config = copy.deepcopy(_DICT_CONFIG)
    config["root"]["level"] = level
    config["handlers"]["console"]["level"] = level
    dictConfig(config)
