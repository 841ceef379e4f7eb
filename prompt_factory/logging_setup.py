"""Central logging configuration for the command line tool.

Applies a root stderr handler so module loggers do not interleave with the
interactive prompts on stdout, and avoids duplicate handlers when called more
than once in the same process.
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
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
}


def configure_logging(level: str = "WARNING") -> None:
    """Configure application-wide logging once.

    If the root logger already has handlers only the level is updated, which
    keeps pytest's capture handlers and repeated CLI invocations intact.
    """
    root = logging.getLogger()
    level = (level or "WARNING").upper()
    if root.handlers:
        root.setLevel(level)
        return
    cfg = copy.deepcopy(_DICT_CONFIG)
    cfg["root"]["level"] = level
    dictConfig(cfg)
