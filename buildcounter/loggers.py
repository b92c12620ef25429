"""
Copyright 2025 Adobe
All Rights Reserved.

NOTICE: Adobe permits you to use, modify, and distribute this file in accordance
with the terms of the Adobe license agreement accompanying it.
"""

import logging
import sys
from typing import Optional

import colorlog


class CustomColoredFormatter(colorlog.ColoredFormatter):
    def __init__(self, fmt: str, no_color: bool, color: str = "white"):
        super().__init__(
            fmt, no_color=no_color, log_colors=self._get_log_level_colors(color)
        )
        self.fmt = fmt
        self.color = color

    @staticmethod
    def _get_log_level_colors(color: str) -> dict:
        return {
            "DEBUG": color,
            "INFO": color,
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red",
        }


def _get_logger_format(no_log_color: bool, disable_timestamps: bool):
    timestamp = "" if disable_timestamps else "%(asctime)s "
    return CustomColoredFormatter(
        f"%(log_color)s{timestamp}%(levelname)-8s %(message)s",
        no_log_color,
    )


def initialize_root_logger(
    debug: bool,
    no_log_color: bool,
    disable_timestamps: bool,
    log_file: Optional[str] = None,
) -> None:
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_get_logger_format(no_log_color, disable_timestamps))
    logger.handlers.clear()
    logger.addHandler(console_handler)

    if log_file:
        # The log file should never use colored output and always has timestamps
        file_handler = logging.FileHandler(log_file, "a", encoding="utf8")
        file_handler.setFormatter(_get_logger_format(True, False))
        logger.addHandler(file_handler)
