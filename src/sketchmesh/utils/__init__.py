"""Utility functions for sketchmesh.

This module provides utility functions including:

- Logging setup and configuration
- Operation outcome tracking
"""

from sketchmesh.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
