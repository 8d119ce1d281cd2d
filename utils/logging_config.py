# utils/logging_config.py

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

PACKAGE_LOGGERS = ("core", "security", "utils", "cli")

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

class CustomLogger:
    """
    Search logging with a readable console stream, a rotating text log and a
    structured JSON log of search operations.
    """

    def __init__(self, name: str, log_dir: str = "logs", console_level: int = logging.INFO):
        self.name = name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.console_level = console_level
        self.logger = self._setup_logger()

    @property
    def structured_log_path(self) -> Path:
        return self.log_dir / f"{self.name}_structured.json"

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger(self.name)
        logger.setLevel(logging.DEBUG)

        # Re-running setup replaces the previous handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

        file_handler = self._rotating_handler(self.log_dir / f"{self.name}.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

        # Operation records only; stage counts stay in the text log
        json_handler = self._rotating_handler(self.structured_log_path)
        json_handler.setLevel(logging.INFO)
        json_handler.addFilter(lambda record: hasattr(record, 'operation'))
        json_handler.setFormatter(JSONFormatter())
        logger.addHandler(json_handler)

        return logger

    @staticmethod
    def _rotating_handler(path: Path) -> logging.Handler:
        return logging.handlers.RotatingFileHandler(
            path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS
        )

    def log_operation(self, operation: str, **fields):
        """
        Record one search operation

        The console and text log get a one-line summary; the JSON log gets
        every field as a top-level key.
        """
        summary = ", ".join(f"{key}={value}" for key, value in fields.items()
                            if value is not None)
        self.logger.info("%s: %s", operation, summary,
                         extra={'operation': operation, 'fields': fields})


class JSONFormatter(logging.Formatter):
    """One JSON object per operation record"""

    def format(self, record):
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'operation': getattr(record, 'operation', None),
        }
        log_data.update(getattr(record, 'fields', {}))

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        # Record ids and filter values may be any JSON-unfriendly type
        return json.dumps(log_data, default=str)


def setup_logging(config) -> CustomLogger:
    """
    Route application logging through a CustomLogger

    The package loggers (core, security, utils, cli) share its handlers, so
    module-level loggers end up in the same files.
    """
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    app_logger = CustomLogger("gallery_search", log_dir=config.log_dir, console_level=level)

    for package in PACKAGE_LOGGERS:
        package_logger = logging.getLogger(package)
        package_logger.setLevel(logging.DEBUG)
        package_logger.handlers = list(app_logger.logger.handlers)
        package_logger.propagate = False

    return app_logger
