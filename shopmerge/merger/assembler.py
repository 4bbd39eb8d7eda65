"""
Builds the external JSON document from merged shops.
"""

import json
from typing import Any, Dict, List

from ..core.exceptions import SerializationError
from ..core.models import MergedShop

RESPONSE_FIELD = 'data'


def assemble_response(shops: List[MergedShop]) -> Dict[str, Any]:
    """Wrap merged shops under the top-level response field."""
    return {RESPONSE_FIELD: [shop.to_json() for shop in shops]}


def serialize_response(shops: List[MergedShop]) -> str:
    """
    Serialize merged shops to the response body.

    Args:
        shops: Merged shops

    Returns:
        JSON text

    Raises:
        SerializationError: If the document cannot be encoded
    """
    try:
        return json.dumps(assemble_response(shops), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize merged shops: {e}") from e
