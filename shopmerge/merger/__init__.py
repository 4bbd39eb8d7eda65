# shopmerge/merger/__init__.py
"""
Merging of shop listings from different sources.
"""

from .shop_merger import ShopMerger, merge_shops
from .assembler import assemble_response, serialize_response

__all__ = [
    'ShopMerger',
    'merge_shops',
    'assemble_response',
    'serialize_response'
]
