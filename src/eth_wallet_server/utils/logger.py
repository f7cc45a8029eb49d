# src/eth_wallet_server/utils/logger.py
import logging
import logging.handlers
import os
from typing import Optional

CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LogConfig:
    def __init__(
        self,
        level: str = "INFO",
        log_dir: Optional[str] = None,
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        self.level = logging.getLevelName(level.upper())
        self.log_dir = log_dir
        self.max_size = max_size
        self.backup_count = backup_count

    def setup_logging(self) -> logging.Logger:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.level)

        # Drop handlers from an earlier call so repeated setup does not duplicate output
        for handler in list(root_logger.handlers):
            if getattr(handler, "_wallet_server", False):
                root_logger.removeHandler(handler)
                handler.close()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(self.level)
        self._attach(root_logger, console_handler)

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                os.path.join(self.log_dir, 'eth_wallet_server.log'),
                maxBytes=self.max_size,
                backupCount=self.backup_count
            )
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            file_handler.setLevel(logging.DEBUG)
            self._attach(root_logger, file_handler)

        return root_logger

    @staticmethod
    def _attach(root_logger: logging.Logger, handler: logging.Handler):
        handler._wallet_server = True
        root_logger.addHandler(handler)


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Configure console and optional rotating file logging"""
    return LogConfig(level=level, log_dir=log_dir).setup_logging()


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a named logger; handlers live on the root logger"""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
