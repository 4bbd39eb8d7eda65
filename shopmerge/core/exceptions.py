"""
Exception hierarchy for the shop aggregation pipeline.
"""

from typing import Optional


class ShopMergeError(Exception):
    """Base exception for shopmerge errors."""
    pass


class ConfigurationError(ShopMergeError):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


class UpstreamError(ShopMergeError):
    """Raised when an upstream shop source cannot be used."""

    def __init__(self, source: Optional[str], message: str):
        super().__init__(message)
        self.source = source
        self.message = message

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class FetchError(UpstreamError):
    """Raised when the outbound request fails or returns an error status."""
    pass


class ParseError(UpstreamError):
    """Raised when an upstream response cannot be decoded or parsed."""
    pass


class SerializationError(ShopMergeError):
    """Raised when the merged result cannot be serialized to JSON."""
    pass
