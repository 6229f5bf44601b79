"""Logging configuration and utilities."""

from analyzer.shared.logging.config import (
    StructuredFormatter,
    log_analysis_event,
    setup_logging,
)

__all__ = ["setup_logging", "log_analysis_event", "StructuredFormatter"]
