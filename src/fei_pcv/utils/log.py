"""Logging setup for scripts and the CLI."""

import os
import sys
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

DEFAULT_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> str:
    """
    Replace loguru's default sink with one at the requested level.

    The level comes from `level`, else the FEI_PCV_LOG_LEVEL environment
    variable (a .env file is honored), else WARNING. Returns the level used.
    """
    load_dotenv()
    level = (level or os.environ.get("FEI_PCV_LOG_LEVEL") or DEFAULT_LEVEL).upper()

    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(log_file, rotation="1 day", retention="7 days", level=level)
    return level
