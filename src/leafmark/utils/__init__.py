"""Shared utilities for Leafmark."""

from leafmark.utils.logger import get_logger

__all__ = ["get_logger"]
