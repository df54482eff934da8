"""Structural error classifier.

Every resource kind decodes its own payload type, but all responses share the
`RawBodyResponse` capability. The classifier only relies on that capability,
so one function covers every kind and every lifecycle operation.
"""

from __future__ import annotations

from core.domain.models import Diagnostic, Operation
from core.interfaces.api import RawBodyResponse

NO_RESPONSE_BODY = "(no response body)"

# The Medusa Admin API answers 200 on every successful mutation, create included.
EXPECTED_STATUS: dict[Operation, int] = {
    Operation.CREATE: 200,
    Operation.READ: 200,
    Operation.UPDATE: 200,
    Operation.DELETE: 200,
}

_VERBS: dict[Operation, tuple[str, str]] = {
    Operation.CREATE: ("creating", "create"),
    Operation.READ: ("retrieving", "retrieve"),
    Operation.UPDATE: ("updating", "update"),
    Operation.DELETE: ("deleting", "delete"),
}


def read_response_body(response: object) -> str:
    """Return the raw body as text, or the sentinel when none is available."""

    if not isinstance(response, RawBodyResponse):
        return NO_RESPONSE_BODY
    body = response.raw_body()
    if not body:
        return NO_RESPONSE_BODY
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return str(body)


def error_subject(operation: Operation, entity_name: str, entity_id: str | None) -> tuple[str, str]:
    """Summary and sentence lead shared by every diagnostic of one operation."""

    progressive, infinitive = _VERBS[operation]
    target = entity_name
    if operation is Operation.READ and entity_id:
        target = f"{entity_name} with id {entity_id}"
    return f"Error {progressive} {target}", f"Could not {infinitive} {target}"


def classify(
    operation: Operation,
    entity_name: str,
    entity_id: str | None,
    response: RawBodyResponse | None,
    transport_error: BaseException | None,
) -> Diagnostic | None:
    """Turn a call outcome into a `Diagnostic`, or None when it succeeded.

    Rules, in order:
    1. A transport error wins; no status code is available.
    2. Any status other than the operation's expected code reports the code
       and the raw body.
    3. Otherwise the call succeeded.
    """

    if operation not in EXPECTED_STATUS:
        raise ValueError(f"operation {operation.value!r} issues no API call")

    summary, lead = error_subject(operation, entity_name, entity_id)

    if transport_error is not None:
        return Diagnostic(summary=summary, detail=f"{lead}, unexpected error: {transport_error}")

    status = getattr(response, "status_code", None)
    if status != EXPECTED_STATUS[operation]:
        return Diagnostic(
            summary=summary,
            detail=f"{lead}, status code: {status} ({read_response_body(response)})",
        )

    return None
