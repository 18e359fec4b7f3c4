"""Configures the logging system for the script."""
import os
import sys
import logging
from logging.handlers import RotatingFileHandler

LOG_DIR_ENV = "MESSAGEKIT_LOG_DIR"


def log_dir() -> str:
    """Directory the rotating log files are written to."""
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return override
    return os.path.join(os.path.dirname(__file__), 'logs')


def settings(script_path, level=logging.DEBUG):
    """Return a file-backed logger named after *script_path*."""
    script_name = os.path.basename(script_path)
    log_name = script_name.rsplit('.', 1)[0] + '.log'
    log_file = os.path.join(log_dir(), log_name)
    os.makedirs(os.path.dirname(log_file), exist_ok=True)

    logger = logging.getLogger(script_name)

    # Prevent adding multiple handlers
    if not logger.handlers:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1024*1024*10,  # 10 MB
            backupCount=10,
            encoding='utf-8'
        )
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s [%(filename)s:%(lineno)d] %(message)s'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.setLevel(level)
        logger.propagate = False

    # Scraped names and message bodies are arbitrary unicode
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding='utf-8')

    return logger
