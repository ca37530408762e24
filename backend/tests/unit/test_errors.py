"""Unit tests for the error payloads and exception handlers."""

import json

from fastapi.exceptions import RequestValidationError

from ghibli_art.errors import (
    EntitlementError,
    ProviderError,
    request_validation_error_handler,
)
from ghibli_art.models.entitlement import AccessReason


def _validation_error(*locs: tuple) -> RequestValidationError:
    return RequestValidationError(
        [{"type": "value_error", "loc": loc, "msg": "bad", "input": None} for loc in locs]
    )


class TestRequestValidationHandler:
    async def test_file_field_maps_to_no_file(self):
        exc = _validation_error(("body", "style"), ("body", "file"))

        response = await request_validation_error_handler(None, exc)

        assert response.status_code == 400
        assert json.loads(response.body) == {"error": "No file provided"}

    async def test_other_fields_map_to_invalid_request(self):
        exc = _validation_error(("query", "session_id"))

        response = await request_validation_error_handler(None, exc)

        assert response.status_code == 400
        assert json.loads(response.body) == {"error": "Invalid request"}


class TestPayloads:
    def test_entitlement_payload_carries_reason(self):
        error = EntitlementError("Subscription required", AccessReason.SUBSCRIPTION_REQUIRED)
        assert error.status_code == 402
        assert error.to_payload() == {
            "error": "Subscription required",
            "reason": "subscription_required",
        }

    def test_provider_payload_omits_missing_details(self):
        assert ProviderError("Generation failed").to_payload() == {"error": "Generation failed"}
        assert ProviderError("Generation failed", details="timeout").to_payload() == {
            "error": "Generation failed",
            "details": "timeout",
        }
