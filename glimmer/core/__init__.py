"""
Core utilities and configuration for Glimmer.

This package provides core functionality including logging configuration,
monitoring, database setup, and shared models.
"""

from glimmer.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
