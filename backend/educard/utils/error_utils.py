"""
Helpers that turn upstream error bodies into user-facing messages.

The upstream API is a Django REST Framework service, so an error body may
carry any of ``detail``, ``message``, ``non_field_errors`` or an ``errors``
mapping of field name to a list of messages.
"""

import json
import re
from typing import Any, Dict, List, Optional

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"

STATUS_MESSAGES: Dict[int, str] = {
    400: "Invalid request. Please check your input.",
    401: "Authentication required. Please login again.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    409: "A conflict occurred.",
    422: "Validation error. Please check your input.",
    429: "Too many requests. Please try again later.",
    500: "Server error. Please try again later.",
    503: "Service unavailable. Please try again later.",
}

NO_RESPONSE_MESSAGE = "No response from server. Please check your internet connection."
GENERIC_STATUS_MESSAGE = "An error occurred. Please try again."


def format_field_name(field: str) -> str:
    """Format a snake_case field name as Title Case."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), field.replace("_", " "))


def _extract_error_message(payload: Dict[str, Any], default: str) -> str:
    detail = payload.get("detail")
    if isinstance(detail, str) and detail:
        return detail

    message = payload.get("message")
    if message:
        return str(message)

    non_field_errors = payload.get("non_field_errors")
    if isinstance(non_field_errors, list):
        return non_field_errors[0] if non_field_errors else default

    errors = payload.get("errors")
    if isinstance(errors, str):
        return errors
    if isinstance(errors, dict) and errors:
        field, first = next(iter(errors.items()))
        if isinstance(first, list) and first:
            return f"{format_field_name(field)}: {first[0]}"
        if isinstance(first, str):
            return first

    return default


def parse_api_error(error: Any, default: str = DEFAULT_ERROR_MESSAGE) -> str:
    """
    Extract the most meaningful message from an error body.

    Accepts a decoded JSON object, a JSON string, a plain string or an
    exception instance.
    """
    if not error:
        return default

    if isinstance(error, str):
        try:
            parsed = json.loads(error)
        except ValueError:
            return error
        if isinstance(parsed, dict):
            return _extract_error_message(parsed, default)
        return error

    if isinstance(error, Exception):
        return str(error) or default

    if isinstance(error, dict):
        return _extract_error_message(error, default)

    return default


def extract_field_errors(payload: Any) -> Dict[str, List[str]]:
    """Return the ``errors`` mapping of an error body normalized to lists."""
    if not isinstance(payload, dict):
        return {}
    errors = payload.get("errors")
    if not isinstance(errors, dict):
        return {}

    field_errors: Dict[str, List[str]] = {}
    for field, messages in errors.items():
        if isinstance(messages, list):
            field_errors[field] = [str(m) for m in messages]
        elif messages:
            field_errors[field] = [str(messages)]
    return field_errors


def extract_error_messages(payload: Any) -> List[str]:
    """Flatten an error body into ``"field: message"`` strings."""
    field_errors = extract_field_errors(payload)
    if field_errors:
        return [
            f"{field}: {message}"
            for field, messages in field_errors.items()
            for message in messages
        ]
    if isinstance(payload, dict) and payload.get("message"):
        return [str(payload["message"])]
    return [parse_api_error(payload)]


def user_message_for_status(status_code: Optional[int], payload: Any = None) -> str:
    """
    Pick the message shown to the user for a failed upstream call.

    ``status_code`` of ``None`` means the request never got a response.
    """
    if status_code is None:
        return NO_RESPONSE_MESSAGE

    body = payload if isinstance(payload, dict) else {}

    if status_code == 400:
        if body.get("detail"):
            return str(body["detail"])
        non_field_errors = body.get("non_field_errors")
        if isinstance(non_field_errors, list) and non_field_errors:
            return str(non_field_errors[0])
        return STATUS_MESSAGES[400]

    if status_code == 409:
        return str(body.get("detail") or STATUS_MESSAGES[409])

    if status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[status_code]

    return str(body.get("detail") or GENERIC_STATUS_MESSAGE)


def is_server_error(status_code: Optional[int]) -> bool:
    return status_code is not None and status_code >= 500


def is_client_error(status_code: Optional[int]) -> bool:
    return status_code is not None and 400 <= status_code < 500


def format_validation_errors(
    errors: List[Dict[str, Any]],
    skip_locations: tuple = (),
) -> List[Dict[str, Optional[str]]]:
    """
    Convert pydantic error dicts into ``{field, message}`` entries.

    Args:
        errors: ``ValidationError.errors()`` output
        skip_locations: Location parts to drop, e.g. ``("body", "query")``
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in skip_locations]
        message = str(error.get("msg", ""))
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"field": ".".join(loc) or None, "message": message})
    return formatted
