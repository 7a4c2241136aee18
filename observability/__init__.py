"""Observability package for the Apple documentation server."""

from .logging import setup_logging, get_logger, log_slow_call, JSONFormatter, ColoredFormatter

__all__ = [
    'setup_logging',
    'get_logger',
    'log_slow_call',
    'JSONFormatter',
    'ColoredFormatter'
]
