"""
Simple logging for pglocks on top of loguru.
"""

import os
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger as loguru_logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[component]} | {message}"


class AsyncLogger:
    """
    Component logger with a flat format.

    Format: timestamp | level | component | message
    Keyword context is bound into the record's `extra`.
    """

    # Handlers are shared between all instances
    _configured = False

    def __init__(self, component: str, debug_mode: bool = False):
        self.component = component
        self.debug_mode = debug_mode
        self._setup_handlers()

    def _setup_handlers(self):
        """
        Install loguru sinks once per process.

        - stderr at the configured level
        - optional file sink, rotated at 10 MB, written from a queue
        """
        if AsyncLogger._configured:
            return

        settings = _read_logging_settings()
        level = "DEBUG" if self.debug_mode else settings.get("level", "WARNING")

        loguru_logger.remove()
        loguru_logger.add(sys.stderr, format=LOG_FORMAT, level=level)

        log_file = settings.get("file")
        if log_file:
            loguru_logger.add(
                log_file,
                format=LOG_FORMAT,
                level="DEBUG",
                rotation=f"{settings.get('rotation_size_mb', 10)} MB",
                compression="zip",
                enqueue=True,  # Non-blocking writes
            )

        AsyncLogger._configured = True

    def log(self, level: str, message: str, /, **context):
        # Context keys never override the component
        loguru_logger.bind(**{**context, "component": self.component}).log(level, message)

    def debug(self, message: str, /, **context):
        """Log DEBUG."""
        self.log("DEBUG", message, **context)

    def info(self, message: str, /, **context):
        """Log INFO."""
        self.log("INFO", message, **context)

    def warning(self, message: str, /, **context):
        """Log WARNING."""
        self.log("WARNING", message, **context)

    def error(self, message: str, /, include_trace: Optional[bool] = None, **context):
        """
        Log ERROR with an optional stack trace.

        Args:
            message: Error message
            include_trace: Attach the current traceback (None = follow debug_mode)
            **context: Extra context
        """
        should_include_trace = include_trace if include_trace is not None else self.debug_mode

        if should_include_trace:
            import traceback

            context["stack_trace"] = traceback.format_exc()

        self.log("ERROR", message, **context)


class PerformanceLogger:
    """
    Logger for timings.

    Records the duration of each measured operation.
    """

    def __init__(self):
        self.logger = AsyncLogger("performance", debug_mode=_get_debug_mode())

    @contextmanager
    def measure(self, operation: str, /, **context):
        """
        Context manager timing an operation.

        Usage:
        ```
        with perf_logger.measure("catalog_load", path=str(path)):
            catalog = load_catalog(path)
        ```
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self.logger.info(
                "Operation completed",
                **{**context, "operation": operation, "duration_ms": duration * 1000},
            )


def _read_logging_settings() -> Dict[str, Any]:
    """Read the `logging` section of `.pglocks` with env overrides."""
    settings: Dict[str, Any] = {}
    try:
        config_path = Path(".pglocks")
        if config_path.is_file():
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if isinstance(config, dict) and isinstance(config.get("logging"), dict):
                settings.update(config["logging"])
    except (OSError, yaml.YAMLError):
        # Settings reports a broken file; logging falls back to defaults
        pass

    env_level = os.getenv("PGLOCKS_LOG_LEVEL")
    if env_level:
        settings["level"] = env_level.upper()
    env_file = os.getenv("PGLOCKS_LOG_FILE")
    if env_file:
        settings["file"] = env_file
    return settings


def _get_debug_mode() -> bool:
    """debug_mode from `.pglocks` or the PGLOCKS_DEBUG environment variable."""
    if _read_logging_settings().get("debug_mode"):
        return True
    return os.getenv("PGLOCKS_DEBUG", "false").lower() == "true"


logger = AsyncLogger("pglocks", debug_mode=_get_debug_mode())
perf_logger = PerformanceLogger()
