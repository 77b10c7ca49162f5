import sys
from loguru import logger
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_configured = False

def setup_logger(log_level: str = "INFO", log_file: Optional[Path] = None, force: bool = False):
    """Configure loguru for the CLI. Later calls are no-ops unless a file or ``force`` is given."""
    global _configured

    if _configured and log_file is None and not force:
        return logger

    logger.remove()

    # Pipeline progress goes to stderr so stdout stays clean for story output
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level.upper(), colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8",
        )

    _configured = True
    return logger
