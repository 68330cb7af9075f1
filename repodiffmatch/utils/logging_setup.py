"""Centralized logging configuration for repodiffmatch."""

import json
import logging
import logging.handlers
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class SensitiveDataFilter(logging.Filter):
    """Filter to redact sensitive data from logs."""

    # Patterns for sensitive data
    API_KEY_PATTERN = re.compile(r'(api[_-]?key|token|secret|password|authorization)["\']?\s*[:=]\s*["\']?([^"\'\s]+)', re.IGNORECASE)
    GITHUB_TOKEN_PATTERN = re.compile(r'\b(gh[pousr]_[A-Za-z0-9]{20,}|github_pat_[A-Za-z0-9_]{20,})\b')

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and redact sensitive information from log records."""
        if hasattr(record, 'msg'):
            record.msg = self._redact_message(str(record.msg))

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_message(str(v)) for k, v in record.args.items()}
            elif isinstance(record.args, (list, tuple)):
                record.args = tuple(self._redact_message(str(arg)) for arg in record.args)

        return True

    def _redact_message(self, message: str) -> str:
        """Redact sensitive data from a message."""
        message = self.API_KEY_PATTERN.sub(r'\1=***REDACTED***', message)
        return self.GITHUB_TOKEN_PATTERN.sub('***REDACTED***', message)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, 'extra_fields'):
            log_obj.update(record.extra_fields)

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        for key in ['repository', 'operation', 'duration']:
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        return json.dumps(log_obj, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for terminals."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format with colors for console output."""
        if not sys.stderr.isatty():
            return super().format(record)

        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    name: str = 'repodiffmatch',
    level: str = 'WARNING',
    log_dir: Optional[Path] = None,
    console: bool = True,
    file: bool = False,
    json_format: bool = True,
    redact_sensitive: bool = True
) -> logging.Logger:
    """
    Setup centralized logging configuration.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (default: logs/)
        console: Enable console output
        file: Enable file output
        json_format: Use JSON format for file logs
        redact_sensitive: Redact sensitive data from logs

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    # File output captures everything, console honours the requested level
    logger.setLevel(logging.DEBUG if file else getattr(logging, level.upper()))
    logger.handlers.clear()
    logger.propagate = False

    # Handler filters also see records propagated from child loggers
    sensitive_filter = SensitiveDataFilter() if redact_sensitive else None

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level.upper()))

        if sys.stderr.isatty():
            console_formatter = ConsoleFormatter(
                '%(asctime)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        else:
            console_formatter = logging.Formatter(
                '%(asctime)s - %(levelname)s - [%(module)s] - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        console_handler.setFormatter(console_formatter)
        if sensitive_filter is not None:
            console_handler.addFilter(sensitive_filter)
        logger.addHandler(console_handler)

    if file:
        log_dir = Path(log_dir) if log_dir else Path.cwd() / 'logs'
        log_dir.mkdir(parents=True, exist_ok=True)

        date_str = datetime.now().strftime('%Y%m%d')
        suffix = 'jsonl' if json_format else 'log'
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f'repodm_{date_str}.{suffix}',
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    '%(asctime)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S'
                )
            )

        file_handler.setLevel(logging.DEBUG)  # Capture all levels in file
        if sensitive_filter is not None:
            file_handler.addFilter(sensitive_filter)
        logger.addHandler(file_handler)

    return logger


def log_operation(logger: logging.Logger, operation: str, **context):
    """
    Log an operation with context.

    Args:
        logger: Logger instance
        operation: Operation name
        **context: Additional context to log
    """
    logger.info(f"Starting operation: {operation}", extra={'operation': operation, 'extra_fields': context})
