import os
import logging

from .config import LOG_DIR, LOG_LEVEL

LOG_FILE_NAME = "app.log"
API_LOGGER_NAME = "cbms.api"

_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_dir: str = LOG_DIR, level: str = LOG_LEVEL) -> logging.Logger:
    """Setup the file logger shared by the app. Safe to call on every rerun."""
    os.makedirs(log_dir, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    log_path = os.path.abspath(os.path.join(log_dir, LOG_FILE_NAME))

    # Avoid duplicate handlers (Streamlit re-executes the script on every interaction)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path:
            return root

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(file_handler)

    return root


def log_api_call(method: str, path: str, status, elapsed: float):
    """Log a single REST call: GET /payments/ | status:200 | 0.123s"""
    logging.getLogger(API_LOGGER_NAME).info(
        f"{method.upper()} {path} | status:{status if status is not None else 'ERR'} | {elapsed:.3f}s"
    )
