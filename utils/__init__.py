"""General utilities for the context assembly tools."""

from .logging import setup_logging

__all__ = ["setup_logging"]
