"""Open information extraction endpoint.

Every path is served by the same handler:

- ``GET /?text=...`` returns the extractions as a JSON array;
- ``OPTIONS`` returns 200 with ``Allow: GET,OPTIONS``;
- any other method is answered with 405 by the application's exception handler.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from apps.api.deps import get_app_config, get_extract_relations_use_case
from packages.common.config import OpenIEConfig
from packages.common.query_string import QueryStringDecodeError, first_value, parse_query
from packages.core.use_cases.extract_relations import (
    ExtractionTimeoutError,
    ExtractRelationsUseCase,
)
from packages.extraction.serializer import serialize_extractions

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_METHODS = "GET,OPTIONS"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_PARAM = "text"


@router.get("/{path:path}", response_class=Response)
async def extract_relations(
    request: Request,
    *,
    use_case: Annotated[ExtractRelationsUseCase, Depends(get_extract_relations_use_case)],
    config: Annotated[OpenIEConfig, Depends(get_app_config)],
) -> Response:
    """Extract relations from the ``text`` query parameter.

    Only the first ``text`` value is used; repeated ``text`` parameters are ignored.

    Returns:
        Response: 200 with the serialized extractions.

    Raises:
        HTTPException: 400 if ``text`` is missing or the query string is malformed,
            413 if ``text`` is too long, 504 when the request timeout expires, 500 on
            engine failure.

    Example:
        >>> response = client.get("/?text=Obama%20gave%20a%20speech")
        >>> assert response.status_code == 200
        >>> assert response.json()[0]["rel"] == "gave"
    """
    # ASGI reports both "/" and "/?" as an empty query string
    query_bytes = request.scope.get("query_string", b"")
    raw_query = query_bytes.decode("utf-8", errors="replace") if query_bytes else None
    try:
        params = parse_query(raw_query)
    except QueryStringDecodeError as e:
        logger.warning("Rejected malformed query string", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Malformed query string: {e}",
        ) from e

    text = first_value(params, TEXT_PARAM)
    if text is None:
        logger.info("Request without text parameter")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required query parameter: {TEXT_PARAM}",
        )

    if len(text) > config.max_text_length:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"Parameter {TEXT_PARAM} exceeds {config.max_text_length} characters",
        )

    try:
        extractions = await use_case.execute(text)
        body = serialize_extractions(extractions)
    except ExtractionTimeoutError as e:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Extraction timed out",
        ) from e
    except Exception as e:
        logger.exception("Unexpected extraction error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during extraction",
        ) from e

    return Response(
        content=body.encode("utf-8"),
        status_code=status.HTTP_200_OK,
        media_type=JSON_CONTENT_TYPE,
    )


@router.options("/{path:path}", response_class=Response)
async def allowed_methods() -> Response:
    """Advertise the supported methods."""
    return Response(status_code=status.HTTP_200_OK, headers={"Allow": ALLOWED_METHODS})


def method_not_allowed() -> Response:
    """Empty 405 response advertising the supported methods."""
    return Response(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={"Allow": ALLOWED_METHODS},
    )


__all__ = ["ALLOWED_METHODS", "JSON_CONTENT_TYPE", "method_not_allowed", "router"]
