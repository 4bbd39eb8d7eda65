"""
Core models and errors for shop aggregation.
"""

from .exceptions import (
    ShopMergeError,
    ConfigurationError,
    UpstreamError,
    FetchError,
    ParseError,
    SerializationError
)

from .models import (
    Source,
    SourceRecord,
    SasOnlineShoppingExtra,
    TrumfNetthandelExtra,
    MergedShop
)

__all__ = [
    'ShopMergeError',
    'ConfigurationError',
    'UpstreamError',
    'FetchError',
    'ParseError',
    'SerializationError',
    'Source',
    'SourceRecord',
    'SasOnlineShoppingExtra',
    'TrumfNetthandelExtra',
    'MergedShop'
]
