"""Utility modules for hacocms."""

from hacocms.utils.logging import setup_logging

__all__ = ["setup_logging"]
