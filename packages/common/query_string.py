"""Raw query string decoding for the extraction endpoint.

The standard ``parse_qs`` helpers drop the distinction between ``name`` and
``name=`` and do not treat ``;`` as a separator, so the query string is parsed
here directly.
"""

import re
from urllib.parse import unquote_plus

_SEPARATORS = re.compile(r"[&;]")
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

QueryParams = dict[str, list[str | None]]


class QueryStringDecodeError(ValueError):
    """Exception raised when a query string component cannot be decoded."""

    pass


def decode_component(component: str) -> str:
    """Form-decode a single query string component as UTF-8.

    Escaped bytes that are not valid UTF-8 decode to U+FFFD.

    Args:
        component: Raw (still percent-encoded) name or value.

    Returns:
        str: Decoded text, with ``+`` turned into a space.

    Raises:
        QueryStringDecodeError: On an incomplete ``%`` escape.

    Examples:
        >>> decode_component("Obama%20gave+a%20speech")
        'Obama gave a speech'
        >>> decode_component("caf%C3%A9")
        'café'
    """
    match = _MALFORMED_ESCAPE.search(component)
    if match:
        raise QueryStringDecodeError(
            f"Malformed percent-escape at position {match.start()}: {component!r}"
        )

    return unquote_plus(component, encoding="utf-8", errors="replace")


def parse_query(raw_query: str | None) -> QueryParams:
    """Parse a raw query string into an ordered mapping of decoded values.

    Parameters are separated by ``&`` or ``;``; empty segments are kept, so
    ``a=1&&b=2`` records the empty name. Each segment is split at its first
    ``=``; a segment without ``=`` records the value ``None``. Repeated names
    append to the same list, and names keep first-seen order.

    Args:
        raw_query: Query string without the leading ``?``, or None when the
            request carried no query string.

    Returns:
        QueryParams: Mapping of parameter name to its values.

    Raises:
        QueryStringDecodeError: If any name or value has a malformed escape.

    Examples:
        >>> parse_query("a=1&a=2;flag")
        {'a': ['1', '2'], 'flag': [None]}
        >>> parse_query(None)
        {}
        >>> parse_query("")
        {'': [None]}
    """
    params: QueryParams = {}
    if raw_query is None:
        return params

    for segment in _SEPARATORS.split(raw_query):
        raw_name, sep, raw_value = segment.partition("=")
        name = decode_component(raw_name)
        value = decode_component(raw_value) if sep else None
        params.setdefault(name, []).append(value)

    return params


def first_value(params: QueryParams, name: str) -> str | None:
    """Return the first value supplied for ``name``.

    A parameter given without ``=`` yields the empty string, so callers can tell
    "present" from "absent" (None).
    """
    values = params.get(name)
    if not values:
        return None
    return values[0] if values[0] is not None else ""


__all__ = [
    "QueryParams",
    "QueryStringDecodeError",
    "decode_component",
    "first_value",
    "parse_query",
]
