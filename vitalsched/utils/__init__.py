"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    VitalSchedError,
    IngestionError,
    MalformedRowError,
    UnknownPolicyError,
    ReportGenerationError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "VitalSchedError",
    "IngestionError",
    "MalformedRowError",
    "UnknownPolicyError",
    "ReportGenerationError",
]
