# termspotter/LoggingSetup.py
import sys
import logging
from pathlib import Path
from typing import List, Union
from logging.handlers import RotatingFileHandler

LOG_FILE_NAME = "termspotter.log"
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def setup_logging(logs_dir: Union[str, Path], verbose: bool = False, is_frozen: bool = False) -> Path:
    """
    Route root-logger output to a rotating log file and, when a console is
    attached, to stdout.

    Per-fragment traces are only emitted by components created with
    verbose=True; DEBUG level here just lets them through.

    Args:
        logs_dir: Directory for termspotter.log and its rotated backups
        verbose: DEBUG level if True, WARNING otherwise
        is_frozen: No console attached, file output only

    Returns:
        Path of the active log file
    """
    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / LOG_FILE_NAME

    level = logging.DEBUG if verbose else logging.WARNING
    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = [
        RotatingFileHandler(log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8')
    ]
    if not is_frozen:
        handlers.append(logging.StreamHandler(sys.stdout))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.info(f"Logging to {log_file}: level={logging.getLevelName(level)}, console={not is_frozen}")
    return log_file
