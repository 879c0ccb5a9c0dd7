import logging
import sys
from pathlib import Path

from agrismart.core.config import settings


def setup_logging() -> logging.Logger:
    """Setup application logging"""

    logger = logging.getLogger("agrismart")
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Repeat calls must not stack handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
