"""
# @ Create Time: 2026-09-29 09:10:51
# @ Modified time: 2026-10-09 14:22:06
# @ Description:
"""

"""
Logger for KerasBridge.
Logs to console and optionally to a file, with rank-0 only logging for distributed runs.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional

from KerasBridge.utils.dist_utils import get_rank

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOGGER_NAME = "kerasbridge"


class Logger:
    """Logger with console and file logging capabilities."""

    def __init__(
        self,
        name: str = DEFAULT_LOGGER_NAME,
        log_file: Optional[str] = None,
        level: int = logging.INFO,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name
            log_file: Path to log file (if None, log only to console)
            level: Logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._add_file_handler(Path(log_file), level)

    def _add_file_handler(self, log_path: Path, level: int) -> None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(file_handler)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def log_rank_zero(self, message: str, level: int = logging.INFO) -> None:
        """
        Log message only on rank 0 process.

        Args:
            message: Message to log
            level: Logging level
        """
        if get_rank() == 0:
            self.logger.log(level, message)

    def log_exception(
        self, message: str, exception: Exception, raise_exception: bool = True
    ) -> None:
        """
        Log exception message and optionally raise the exception.

        Args:
            message: Custom message to log
            exception: Exception to log
            raise_exception: Whether to raise the exception after logging
        """
        self.logger.error(f"{message}: {exception}")

        if raise_exception:
            raise exception

    def prepare_for_logs(
        self, output_dir: str, save_metrics: bool = True, log_level: str = "INFO"
    ) -> None:
        """
        Set the level and add a file handler writing to ``output_dir/kerasbridge.log``.

        Args:
            output_dir: Output directory for logs
            save_metrics: Whether to write logs to file
            log_level: Logging level as string
        """
        level = getattr(logging, log_level.upper(), logging.INFO)
        self.logger.setLevel(level)
        for handler in self.logger.handlers:
            handler.setLevel(level)

        if save_metrics:
            log_path = (Path(output_dir) / "kerasbridge.log").resolve()
            file_handler_exists = any(
                getattr(handler, "baseFilename", None) == str(log_path)
                for handler in self.logger.handlers
            )
            if not file_handler_exists:
                self._add_file_handler(log_path, level)


_loggers: Dict[str, Logger] = {}


def get_logger(name: str = DEFAULT_LOGGER_NAME, log_file: Optional[str] = None) -> Logger:
    """
    Get or create the logger registered under ``name``.

    Args:
        name: Logger name
        log_file: Path to log file (if None, log only to console)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        _loggers[name] = Logger(name, log_file)
    return _loggers[name]
