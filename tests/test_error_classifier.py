"""
Tests for the structural error classifier.
"""

from dataclasses import fields

import httpx
import pytest

from adapters.admin_api import HttpApiResponse
from core.domain.models import Operation
from core.services.error_classifier import NO_RESPONSE_BODY, classify, read_response_body


class _StatusOnly:
    """A response without the raw-body capability."""

    status_code = 500


class TestReadResponseBody:
    def test_returns_body_text(self):
        response = HttpApiResponse(status_code=404, body=b'{"message":"not found"}')
        assert read_response_body(response) == '{"message":"not found"}'

    def test_empty_body_uses_sentinel(self):
        response = HttpApiResponse(status_code=500)
        assert read_response_body(response) == NO_RESPONSE_BODY

    def test_missing_capability_uses_sentinel(self):
        assert read_response_body(_StatusOnly()) == NO_RESPONSE_BODY
        assert read_response_body(None) == NO_RESPONSE_BODY


class TestClassify:
    def test_success_returns_none(self):
        response = HttpApiResponse(status_code=200, body=b"{}")
        for op in (Operation.CREATE, Operation.READ, Operation.UPDATE, Operation.DELETE):
            assert classify(op, "region", "reg_1", response, None) is None

    def test_transport_error_wins(self):
        """A transport failure is reported even when a response object is around."""
        response = HttpApiResponse(status_code=200)
        err = httpx.ConnectError("connection refused")

        diagnostic = classify(Operation.CREATE, "region", None, response, err)

        assert diagnostic is not None
        assert diagnostic.summary == "Error creating region"
        assert diagnostic.detail == "Could not create region, unexpected error: connection refused"

    def test_unexpected_status_includes_code_and_body(self):
        response = HttpApiResponse(status_code=400, body=b'{"message":"bad currency"}')

        diagnostic = classify(Operation.UPDATE, "region", "reg_1", response, None)

        assert diagnostic.summary == "Error updating region"
        assert diagnostic.detail == 'Could not update region, status code: 400 ({"message":"bad currency"})'

    def test_read_names_the_identifier(self):
        response = HttpApiResponse(status_code=404)

        diagnostic = classify(Operation.READ, "region", "reg_missing", response, None)

        assert diagnostic.summary == "Error retrieving region with id reg_missing"
        assert diagnostic.detail == f"Could not retrieve region with id reg_missing, status code: 404 ({NO_RESPONSE_BODY})"

    def test_delete_without_body(self):
        diagnostic = classify(Operation.DELETE, "store", None, _StatusOnly(), None)

        assert diagnostic.summary == "Error deleting store"
        assert diagnostic.detail == f"Could not delete store, status code: 500 ({NO_RESPONSE_BODY})"

    def test_created_status_is_not_success(self):
        """The Admin API answers 200 on create; anything else is reported."""
        response = HttpApiResponse(status_code=201, body=b"{}")
        assert classify(Operation.CREATE, "region", None, response, None) is not None

    def test_import_issues_no_call(self):
        with pytest.raises(ValueError):
            classify(Operation.IMPORT, "region", "reg_1", None, None)


def test_from_httpx_keeps_status_and_body():
    response = HttpApiResponse.from_httpx(httpx.Response(404, json={"message": "nope"}))

    assert [f.name for f in fields(response)] == ["status_code", "body"]
    assert response.status_code == 404
    assert response.payload() == {"message": "nope"}
