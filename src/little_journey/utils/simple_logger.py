"""Simple logging utilities for cleaner output."""

import logging
import sys


class CleanFormatter(logging.Formatter):
    """Formatter that renders progress records compactly."""

    def format(self, record):
        module = record.name.split('.')[-1]

        if record.levelname == 'INFO':
            progress_type = getattr(record, 'progress_type', None)
            if progress_type == 'start':
                return f"🚀 {module}: {record.getMessage()}"
            elif progress_type == 'update':
                return f"   ▶ {record.getMessage()}"
            elif progress_type == 'complete':
                return f"✅ {module}: {record.getMessage()}"
            return f"INFO  | {module}: {record.getMessage()}"
        elif record.levelname == 'ERROR':
            return f"❌ ERROR | {module}: {record.getMessage()}"
        elif record.levelname == 'WARNING':
            return f"⚠️  WARN | {module}: {record.getMessage()}"
        else:
            return f"{record.levelname:5s} | {module}: {record.getMessage()}"


def setup_logging(level: str = "INFO", stream=None) -> None:
    """Set up logging with clean format and suppressed external libraries.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream, stderr by default so stdout stays machine readable
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(CleanFormatter())
    root_logger.addHandler(console_handler)

    # Suppress noisy libraries
    for lib in ['httpx', 'httpcore', 'google.genai', 'google_genai', 'google.auth',
                'urllib3', 'asyncio']:
        logging.getLogger(lib).setLevel(logging.WARNING)


def _log_progress(logger: logging.Logger, message: str, progress_type: str) -> None:
    if not logger.isEnabledFor(logging.INFO):
        return
    record = logger.makeRecord(
        logger.name, logging.INFO, "", 0, message, (), None
    )
    record.progress_type = progress_type
    logger.handle(record)


def log_start(logger: logging.Logger, message: str):
    """Log the start of a task."""
    _log_progress(logger, message, 'start')


def log_update(logger: logging.Logger, message: str):
    """Log a progress update."""
    _log_progress(logger, message, 'update')


def log_complete(logger: logging.Logger, message: str):
    """Log task completion."""
    _log_progress(logger, message, 'complete')
