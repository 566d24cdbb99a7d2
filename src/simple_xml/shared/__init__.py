"""Shared utilities for simple-xml.

This module provides the configuration objects, exception types and logging
helpers used by every other layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DocumentConfig,
    ParsingConfig,
    SerializationConfig,
    SimpleXMLConfig,
)
from .exceptions import (
    InvalidCursorStateError,
    MalformedInputError,
    SimpleXMLError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DocumentConfig",
    "ParsingConfig",
    "SerializationConfig",
    "SimpleXMLConfig",
    "InvalidCursorStateError",
    "MalformedInputError",
    "SimpleXMLError",
    "CorrelationLogger",
    "get_logger",
]
