"""Logger utility module for logging messages with configurable logging levels and handlers."""
import logging
import os
from datetime import datetime

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    """Singleton logger class for road growth.

    This class provides a centralized logging mechanism with configurable options
    for enabling/disabling logging, console output and file output.
    """
    _instance = None
    _initialized = False
    _logging_enabled = True
    _log_to_console = True
    _log_to_file = False
    _log_dir = 'logs'

    @classmethod
    def configure(cls, logging_enabled=True, log_to_console=True, log_to_file=False, log_dir='logs'):
        """Configure global logging settings.

        Settings take effect the first time the root logger is built, so call this
        before any component asks for a logger.

        Args:
            logging_enabled: Whether logging is enabled globally.
            log_to_console: Whether to output logs to console.
            log_to_file: Whether to output logs to a timestamped file.
            log_dir: Directory that receives log files.
        """
        cls._logging_enabled = logging_enabled
        cls._log_to_console = log_to_console
        cls._log_to_file = log_to_file
        cls._log_dir = log_dir

    def __new__(cls):
        """Create or return the singleton instance of Logger.

        Returns:
            The singleton Logger instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Build the root logger and its handlers once per process."""
        if Logger._initialized:
            return

        self.logger = logging.getLogger('RoadGrowth')
        if not Logger._logging_enabled:
            self.logger.addHandler(logging.NullHandler())
            self.logger.propagate = False
            Logger._initialized = True
            return

        self.logger.setLevel(logging.DEBUG)
        formatter = logging.Formatter(_FORMAT)

        if Logger._log_to_file:
            os.makedirs(Logger._log_dir, exist_ok=True)
            current_time = datetime.now().strftime('%Y%m%d_%H%M%S')
            file_handler = logging.FileHandler(os.path.join(Logger._log_dir, f'roadgrowth_{current_time}.log'))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        if Logger._log_to_console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        Logger._initialized = True

    @staticmethod
    def get_logger(name=None):
        """Get a logger instance, optionally as a child logger with the specified name.

        Args:
            name: Optional name for child logger.

        Returns:
            A configured logger instance.
        """
        logger_instance = Logger()
        if name:
            child_logger = logging.getLogger(f'RoadGrowth.{name}')
            if not Logger._logging_enabled:
                child_logger.handlers = []
                child_logger.addHandler(logging.NullHandler())
                child_logger.propagate = False
            return child_logger
        return logger_instance.logger
