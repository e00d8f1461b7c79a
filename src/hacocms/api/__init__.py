"""API module for hacocms.

Provides the HTTP client for the hacoCMS content API.
"""

from hacocms.api.client import HacoCmsClient

__all__ = ["HacoCmsClient"]
