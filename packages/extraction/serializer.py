"""Relation serializer: extractions to the wire JSON format.

Each extraction becomes one JSON object with the fields, in order:
``confidence``, ``context``, ``negated``, ``passive``, ``string``, ``rel``,
``arg1``, ``arg2s``. The two flags are encoded as ``1``/``0``, not booleans.
"""

import json
from collections.abc import Iterable
from typing import Any

from packages.schemas.extraction import Extraction


def extraction_to_dict(extraction: Extraction) -> dict[str, Any]:
    """Build the ordered wire mapping for a single extraction.

    Examples:
        >>> extraction = Extraction(confidence=0.5, relation="is", subject="Sky", objects=["blue"])
        >>> list(extraction_to_dict(extraction))
        ['confidence', 'context', 'negated', 'passive', 'string', 'rel', 'arg1', 'arg2s']
    """
    return {
        "confidence": extraction.confidence,
        "context": extraction.context,
        "negated": 1 if extraction.negated else 0,
        "passive": 1 if extraction.passive else 0,
        "string": extraction.triple_text,
        "rel": extraction.relation,
        "arg1": extraction.subject,
        "arg2s": list(extraction.objects),
    }


def serialize_extractions(extractions: Iterable[Extraction]) -> str:
    """Serialize extractions into one compact JSON array.

    Args:
        extractions: Extractions in engine order; the order is kept as is.

    Returns:
        str: JSON array text, ``[]`` when there are no extractions.

    Raises:
        ValueError: If a confidence is NaN or infinite.

    Examples:
        >>> serialize_extractions([])
        '[]'
    """
    return json.dumps(
        [extraction_to_dict(extraction) for extraction in extractions],
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    )


__all__ = ["extraction_to_dict", "serialize_extractions"]
