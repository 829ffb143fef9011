"""
ENCRYPTION LOGGING
==================
Logger factory for cipher, key and transform events.

FLOW:
- get_logger() hands out stdlib loggers configured once per name.

WHY:
- Failed decrypts are absorbed, so the log is where they become visible.

HOW:
- Level from ENCRYPTION_SETTINGS; optional rotating file handler.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from FieldEncryption.encryption_config import ENCRYPTION_SETTINGS


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(ENCRYPTION_SETTINGS["LOG_LEVEL"])
    log_file = ENCRYPTION_SETTINGS["LOG_FILE"]
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=ENCRYPTION_SETTINGS["LOG_MAX_BYTES"],
            backupCount=ENCRYPTION_SETTINGS["LOG_BACKUP_COUNT"],
        )
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
    return logger
