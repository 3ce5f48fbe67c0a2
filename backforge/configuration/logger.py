import logging
import sys
from typing import Optional


class RegistryLogger:
    """
    Logger shared by a registry and the backends it creates.

    Every record carries the tag of the component that wrote it ('[REGISTRY]',
    '[DISCOVER]', '[SCHEMA]', or a backend's own tag). Console output is
    colored on a terminal; an optional log file receives the same records
    with full timestamps.
    """

    FORMAT = '%(asctime)s | %(method)10s | %(levelname)4s | %(message)s'

    def __init__(self,
                 name: str = "backforge",
                 log_file: Optional[str] = None,
                 console_level: str = "INFO",
                 file_level: str = "DEBUG",
                 use_colors: bool = True):
        """
        Args:
            name: Logger name (child loggers such as 'backforge.schema.descriptors' share its handlers)
            log_file: Path to log file (if None, only console logging)
            console_level: Minimum level for console output
            file_level: Minimum level for file output
            use_colors: Whether to use colored console output
        """
        self.name = name
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.close()

        self.logger.addHandler(self._console_handler(console_level, use_colors and sys.stdout.isatty()))
        if log_file:
            self.logger.addHandler(self._file_handler(log_file, file_level))

    def _console_handler(self, level: str, colored: bool) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(getattr(logging, level.upper()))
        formatter_class = ColoredFormatter if colored else logging.Formatter
        handler.setFormatter(formatter_class(fmt=self.FORMAT, datefmt='%H:%M:%S'))
        return handler

    def _file_handler(self, log_file: str, level: str) -> logging.Handler:
        handler = logging.FileHandler(log_file)
        handler.setLevel(getattr(logging, level.upper()))
        handler.setFormatter(logging.Formatter(fmt=self.FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        return handler

    def close(self) -> None:
        """Detach every handler and release the log file."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def log(self, level: str, method: str, message: str, *args, **kwargs):
        """Log message tagged with the calling component."""
        getattr(self.logger, level.lower())(message, *args, extra={'method': method}, **kwargs)


class ColoredFormatter(logging.Formatter):
    """Formatter coloring each console line by level, with 4-letter level names."""

    # level -> (abbreviation, ANSI color)
    LEVEL_STYLES = {
        'DEBUG': ('DBUG', '\033[36m'),
        'INFO': ('INFO', '\033[32m'),
        'WARNING': ('WARN', '\033[33m'),
        'ERROR': ('ERRO', '\033[31m'),
        'CRITICAL': ('CRIT', '\033[35m'),
    }
    RESET = '\033[0m'

    def format(self, record):
        levelname = record.levelname
        abbreviation, color = self.LEVEL_STYLES.get(levelname, (levelname[:4], ''))

        record.levelname = abbreviation
        try:
            formatted = super().format(record)
        finally:
            record.levelname = levelname

        return f"{color}{formatted}{self.RESET}" if color else formatted
