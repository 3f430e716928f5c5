"""HTTP helpers for yadb."""

from .client import HTTPClient, HTTPResponse

__all__ = [
    "HTTPClient",
    "HTTPResponse",
]
