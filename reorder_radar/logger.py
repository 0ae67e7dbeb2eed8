import logging
import sys
from logging.handlers import RotatingFileHandler

from . import settings

# Libraries whose per-request chatter drowns the run summary.
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logger(name: str | None = None, log_level: int | str | None = None) -> logging.Logger:
    """
    Configures console + rotating file output for a run.

    The console gets bare messages (the pipeline already formats them for
    humans); the file keeps timestamps and logger names for later digging.
    Calling it twice is harmless.
    """
    level = log_level if log_level is not None else settings.LOG_LEVEL
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.hasHandlers():
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.LOG_DIR / settings.LOG_FILENAME,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
