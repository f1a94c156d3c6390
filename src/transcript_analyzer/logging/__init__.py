"""Logging package -- process-wide handler configuration."""

from .setup import setup_logging

__all__ = ["setup_logging"]
