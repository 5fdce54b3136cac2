"""
Validation and unwrapping of the upstream response envelope.

Expected format::

    {
        "success": true,
        "message": "...",
        "data": [...] or {...},
        "pagination": {...},   # list responses only
        "code": 200
    }
"""

import json
from typing import Any, Dict, List, Optional

from educard.core.exceptions import InvalidResponseError, UpstreamAPIError

ENVELOPE_KEYS = ("success", "message", "data", "code")


def is_valid_api_response(response: Any) -> bool:
    """Check the body carries every envelope key."""
    return isinstance(response, dict) and all(key in response for key in ENVELOPE_KEYS)


def is_list_response(response: Any) -> bool:
    return (
        is_valid_api_response(response)
        and isinstance(response["data"], list)
        and isinstance(response.get("pagination"), dict)
    )


def is_detail_response(response: Any) -> bool:
    return is_valid_api_response(response) and isinstance(response["data"], dict)


def _context(context: Optional[str]) -> str:
    return f" ({context})" if context else ""


def _check_envelope(response: Any, context: Optional[str]) -> Dict[str, Any]:
    if not is_valid_api_response(response):
        raise InvalidResponseError(
            f"Invalid API response format{_context(context)}. "
            f"Expected {{ success, message, data, code }} but got: {json.dumps(response, default=str)}"
        )
    if not response["success"]:
        code = response.get("code")
        raise UpstreamAPIError(
            code if isinstance(code, int) and code >= 400 else 400,
            response,
            message=response.get("message") or "API request failed",
        )
    return response


def handle_list_response(response: Any, context: Optional[str] = None) -> List[Any]:
    """Return the ``data`` array of a list response."""
    body = _check_envelope(response, context)
    if not isinstance(body["data"], list):
        raise InvalidResponseError(
            f"Expected array in data field{_context(context)}, "
            f"but got: {type(body['data']).__name__}"
        )
    return body["data"]


def handle_detail_response(response: Any, context: Optional[str] = None) -> Any:
    """Return the ``data`` object of a detail response."""
    body = _check_envelope(response, context)
    if body["data"] is None:
        raise InvalidResponseError(f"No data found in response{_context(context)}")
    return body["data"]


def handle_paginated_response(response: Any, context: Optional[str] = None) -> Dict[str, Any]:
    """Return the whole list response after checking ``data`` and ``pagination``."""
    body = _check_envelope(response, context)
    if not isinstance(body["data"], list):
        raise InvalidResponseError(
            f"Expected array in data field{_context(context)}, "
            f"but got: {type(body['data']).__name__}"
        )
    if not body.get("pagination"):
        raise InvalidResponseError(f"Missing pagination in list response{_context(context)}")
    return body
