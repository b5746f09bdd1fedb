"""Logger configuration for the coach proxy.

Sinks are configured from Settings: stderr always, plus a rotating file when
LOG_FILE is set. Bearer tokens are masked before any sink sees a record.
"""

import re
import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s'\"]+")


def mask_bearer_tokens(record) -> bool:
    """Loguru filter replacing bearer credentials in the message with ``***``."""
    record["message"] = _BEARER_PATTERN.sub(r"\1***", record["message"])
    return True


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Replace loguru's default sink with the proxy's sinks.

    Args:
        level: Minimum level for every sink
        log_file: Path of the rotating log file; None logs to stderr only
        rotation: When the file rolls over (e.g. "10 MB", "1 day")
        retention: How long rolled files are kept (e.g. "7 days")
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, filter=mask_bearer_tokens)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            filter=mask_bearer_tokens,
        )

    logger.debug(f"Logger initialized with level={level}, file={log_file or 'none'}")
