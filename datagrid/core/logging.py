import os
import sys
from typing import List, Optional

from loguru import logger

from .config import GeneralSettings


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
LOG_FILE_PATTERN = "datagrid_{time}.log"


def setup_logging(debug_mode: bool = True, log_dir: Optional[str] = "logs") -> List[int]:
    """
    Configure loguru sinks for the grid engine.

    Replaces any existing sinks with a console sink (DEBUG in debug mode,
    INFO otherwise) and, when ``log_dir`` is set, a rotating DEBUG file sink.

    Returns:
        Ids of the added sinks
    """
    logger.remove()

    level = "DEBUG" if debug_mode else "INFO"
    handler_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handler_ids.append(logger.add(
            os.path.join(log_dir, LOG_FILE_PATTERN),
            rotation="10 MB",
            retention="1 week",
            level="DEBUG",
        ))

    logger.info(f"Logging initialized (level={level}, dir={log_dir or '-'})")
    return handler_ids


def setup_logging_from(settings: GeneralSettings) -> List[int]:
    """Configure logging from the ``general`` config section."""
    return setup_logging(settings.debug_mode, settings.log_dir)
