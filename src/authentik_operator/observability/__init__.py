"""
Observability utilities for the authentik operator.

This module provides structured logging with correlation IDs.
"""

from .logging import OperatorLogger, setup_structured_logging

__all__ = [
    "OperatorLogger",
    "setup_structured_logging",
]
