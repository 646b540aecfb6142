import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from movie_reviews.config.environment import LOGS_DIR, LOG_LEVEL

INFO_LOG_NAME = "info.log"
ERROR_LOG_NAME = "error.log"

MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 1

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _rotating_handler(path: Path, handler_level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT)
    handler.setLevel(handler_level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(logs_dir: str = LOGS_DIR, level: str = LOG_LEVEL):
    """Send application logs to info.log, error.log and the console."""
    logs_path = Path(logs_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    root_level = getattr(logging, str(level).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(root_level)
    console_handler.setFormatter(formatter)

    handlers = (
        _rotating_handler(logs_path / INFO_LOG_NAME, logging.INFO, formatter),
        _rotating_handler(logs_path / ERROR_LOG_NAME, logging.ERROR, formatter),
        console_handler,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # create_app may run more than once per process
    for handler in list(root_logger.handlers):
        if getattr(handler, "_movie_reviews_handler", False):
            root_logger.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler._movie_reviews_handler = True
        root_logger.addHandler(handler)

    # passwords and hashes never reach the log; sign-in logs the normalized email only
    logging.getLogger(__name__).info(f"Logging initialized in {logs_path} at level {logging.getLevelName(root_level)}")
