"""
Envelope unwrapping and upstream error message tests.
"""

import pytest

from educard.core.exceptions import InvalidResponseError, UpstreamAPIError
from educard.utils.error_utils import (
    extract_error_messages,
    extract_field_errors,
    format_field_name,
    format_validation_errors,
    parse_api_error,
    user_message_for_status,
)
from educard.utils.response_handler import (
    handle_detail_response,
    handle_list_response,
    handle_paginated_response,
    is_detail_response,
    is_list_response,
    is_valid_api_response,
)
from fakes import envelope, pagination


class TestResponseHandler:
    def test_envelope_detection(self):
        assert is_valid_api_response(envelope([]))
        assert not is_valid_api_response({"data": []})
        assert not is_valid_api_response([1, 2])
        assert is_list_response(envelope([], pagination(0)))
        assert not is_list_response(envelope([]))
        assert is_detail_response(envelope({"public_id": "x"}))

    def test_list_response_returns_data(self):
        assert handle_list_response(envelope([{"a": 1}])) == [{"a": 1}]

    def test_list_response_rejects_object_data(self):
        with pytest.raises(InvalidResponseError, match="Expected array in data field"):
            handle_list_response(envelope({"a": 1}), "getHolidays")

    def test_malformed_body_names_context(self):
        with pytest.raises(InvalidResponseError) as exc_info:
            handle_detail_response({"results": []}, "getHoliday")
        assert "(getHoliday)" in exc_info.value.message
        assert exc_info.value.status_code == 502

    def test_detail_response_requires_data(self):
        with pytest.raises(InvalidResponseError, match="No data found"):
            handle_detail_response(envelope(None))

    def test_paginated_response_requires_pagination(self):
        body = envelope([{"a": 1}], pagination(1))
        assert handle_paginated_response(body) is body
        with pytest.raises(InvalidResponseError, match="Missing pagination"):
            handle_paginated_response(envelope([]))

    def test_unsuccessful_envelope_raises_upstream_error(self):
        body = {
            "success": False,
            "message": "Holiday overlaps an existing holiday",
            "data": None,
            "code": 409,
        }
        with pytest.raises(UpstreamAPIError) as exc_info:
            handle_detail_response(body)
        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Holiday overlaps an existing holiday"

    def test_unsuccessful_envelope_with_success_code_maps_to_400(self):
        body = {"success": False, "message": "", "data": None, "code": 200}
        with pytest.raises(UpstreamAPIError) as exc_info:
            handle_list_response(body)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "API request failed"


class TestParseApiError:
    def test_precedence(self):
        assert parse_api_error({"detail": "Not allowed", "message": "m"}) == "Not allowed"
        assert parse_api_error({"message": "Something failed"}) == "Something failed"
        assert parse_api_error({"non_field_errors": ["Dates overlap"]}) == "Dates overlap"
        assert parse_api_error({"errors": {"start_date": ["This field is required."]}}) == (
            "Start Date: This field is required."
        )

    def test_strings_and_fallbacks(self):
        assert parse_api_error('{"detail": "Bad"}') == "Bad"
        assert parse_api_error("plain failure") == "plain failure"
        assert parse_api_error(None) == "An unexpected error occurred"
        assert parse_api_error({}, "Fallback") == "Fallback"
        assert parse_api_error(ValueError("boom")) == "boom"


def test_format_field_name():
    assert format_field_name("max_carry_forward_days") == "Max Carry Forward Days"


def test_field_errors_and_messages():
    payload = {"errors": {"description": "Required", "end_date": ["Too late", "Invalid"]}}

    assert extract_field_errors(payload) == {
        "description": ["Required"],
        "end_date": ["Too late", "Invalid"],
    }
    assert extract_error_messages(payload) == [
        "description: Required",
        "end_date: Too late",
        "end_date: Invalid",
    ]
    assert extract_error_messages({"message": "Nope"}) == ["Nope"]


@pytest.mark.parametrize(
    "status_code,payload,expected",
    [
        (None, None, "No response from server. Please check your internet connection."),
        (400, {"detail": "Invalid date"}, "Invalid date"),
        (400, {"non_field_errors": ["Overlap"]}, "Overlap"),
        (400, {}, "Invalid request. Please check your input."),
        (401, {}, "Authentication required. Please login again."),
        (403, {"detail": "ignored"}, "You do not have permission to perform this action."),
        (409, {"detail": "Already exists"}, "Already exists"),
        (429, None, "Too many requests. Please try again later."),
        (503, None, "Service unavailable. Please try again later."),
        (418, {}, "An error occurred. Please try again."),
    ],
)
def test_user_message_for_status(status_code, payload, expected):
    assert user_message_for_status(status_code, payload) == expected


def test_upstream_error_status_mapping():
    assert UpstreamAPIError(None).status_code == 503
    assert UpstreamAPIError(500).status_code == 502
    error = UpstreamAPIError(400, {"errors": {"description": ["Required"]}})
    assert error.status_code == 400
    assert error.details == {"description": ["Required"]}


def test_format_validation_errors_strips_value_error_prefix():
    errors = [{"loc": ("body", "end_date"), "msg": "Value error, End date must be on or after start date"}]

    assert format_validation_errors(errors, skip_locations=("body",)) == [
        {"field": "end_date", "message": "End date must be on or after start date"}
    ]
