"""Logging utilities for PipeRoute."""
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict

from ..configuration.settings import LoggingSettings


def setup_logging(settings: LoggingSettings) -> None:
    """Setup logging configuration based on settings.
    
    Args:
        settings: Logging settings configuration
    """
    level = getattr(logging, settings.level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    
    # Clear existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    
    formatter = logging.Formatter(
        fmt=settings.format_string,
        datefmt=settings.date_format
    )
    
    if settings.console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
    
    if settings.file_output:
        try:
            log_path = Path(settings.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            
            file_handler = logging.handlers.RotatingFileHandler(
                filename=settings.log_file,
                maxBytes=settings.max_file_size_mb * 1024 * 1024,
                backupCount=settings.backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            
        except OSError as e:
            # If file logging fails, log to console
            root_logger.error(f"Failed to setup file logging: {e}")
    
    for component, component_level in settings.component_levels.items():
        component_logger = logging.getLogger(component)
        component_logger.setLevel(getattr(logging, component_level.upper()))
    
    root_logger.debug("PipeRoute logging initialized")


class ContextLogger:
    """Prefixes every message with a fixed set of key=value pairs.
    
    The optimizer uses it to tag per-terminal lines with seed and penalty.
    """
    
    def __init__(self, logger: logging.Logger, context: Dict[str, object]):
        self.logger = logger
        self.context = context
    
    def _prefixed(self, message: str) -> str:
        if not self.context:
            return message
        tags = " ".join(f"{key}={value}" for key, value in self.context.items())
        return f"[{tags}] {message}"
    
    def debug(self, message: str, *args, **kwargs):
        self.logger.debug(self._prefixed(message), *args, **kwargs)
    
    def info(self, message: str, *args, **kwargs):
        self.logger.info(self._prefixed(message), *args, **kwargs)
    
    def warning(self, message: str, *args, **kwargs):
        self.logger.warning(self._prefixed(message), *args, **kwargs)
    
    def error(self, message: str, *args, **kwargs):
        self.logger.error(self._prefixed(message), *args, **kwargs)


def get_context_logger(name: str, **context) -> ContextLogger:
    """Context logger wrapping ``logging.getLogger(name)``."""
    return ContextLogger(logging.getLogger(name), context)
