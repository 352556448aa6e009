"""
pglocks core module.

Exports configuration, errors and logging.
"""

# Configuration
from pglocks.core.config import Settings, ConfigValidator

# Exceptions and errors
from pglocks.core.exceptions import (
    # Python exceptions
    PgLocksError,
    DataIntegrityError,
    ConfigurationError,
    NotFoundError,
    ExportError,
    # HTTP response models
    ErrorType,
    ErrorResponse,
    # Helper functions
    not_found_error,
    internal_error,
    from_exception,
)

# Logging
from pglocks.core.logging import (
    AsyncLogger,
    PerformanceLogger,
    logger,  # Pre-configured global logger
    perf_logger,
)

__all__ = [
    # Configuration
    "Settings",
    "ConfigValidator",
    # Exceptions
    "PgLocksError",
    "DataIntegrityError",
    "ConfigurationError",
    "NotFoundError",
    "ExportError",
    # HTTP error models
    "ErrorType",
    "ErrorResponse",
    # Error helper functions
    "not_found_error",
    "internal_error",
    "from_exception",
    # Logging
    "AsyncLogger",
    "PerformanceLogger",
    "logger",
    "perf_logger",
]
