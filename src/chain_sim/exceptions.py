# MIT License (see LICENSE)
"""Custom exception types for the chain simulator."""
from __future__ import annotations


class ChainConfigError(ValueError):
    """Raised when a chain is constructed from invalid physical parameters."""


__all__ = ["ChainConfigError"]
