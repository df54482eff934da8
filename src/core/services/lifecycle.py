"""Generic resource lifecycle controller.

One controller instance serves one resource kind and any number of entity
instances. It keeps no per-instance state, so the host may drive different
instances from different threads; the host guarantees that a single instance
is never driven concurrently.

Every operation returns a `LifecycleResult` that carries either the complete
post-operation entity or diagnostics, never a partial state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partial
from typing import Any, Callable

import httpx

from core.domain.models import TRANSITIONS, Diagnostic, LifecycleResult, Operation
from core.errors import DecodeError
from core.interfaces.api import AdminApi, ApiResponse
from core.interfaces.resource import DeletableBinding, ResourceKind, SingletonCodec
from core.services.error_classifier import classify, error_subject

logger = logging.getLogger(__name__)


class ResourceLifecycleController:
    def __init__(self, kind: ResourceKind, api: AdminApi) -> None:
        self.kind = kind
        self._api = api

    @property
    def name(self) -> str:
        return self.kind.name

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, declared: Mapping[str, Any]) -> LifecycleResult:
        op = Operation.CREATE
        problems = self.kind.schema.validate_declared(declared, op)
        if problems:
            return self._failed(op, problems)

        try:
            body = self.kind.codec.encode_create(declared)
        except ValueError as exc:
            return self._failed(op, [self._unexpected(op, None, exc)])

        response, diagnostic = self._call(op, None, partial(self.kind.endpoints.create, self._api, body))
        if diagnostic is not None:
            return self._failed(op, [diagnostic])

        remote, diagnostic = self._decode(op, None, response)
        if diagnostic is not None:
            return self._failed(op, [diagnostic])

        # El id y los valores por defecto del servidor pisan lo declarado.
        return self._succeeded(op, {**declared, **remote})

    def read(self, identifier: str | None) -> LifecycleResult:
        op = Operation.READ
        missing = self._missing_id(op, identifier)
        if missing is not None:
            return self._failed(op, [missing])

        ident = identifier or ""
        response, diagnostic = self._call(op, ident, partial(self.kind.endpoints.read, self._api, ident))
        if diagnostic is not None:
            return self._failed(op, [diagnostic])

        remote, diagnostic = self._decode(op, ident, response)
        if diagnostic is not None:
            return self._failed(op, [diagnostic])
        return self._succeeded(op, remote)

    def update(self, declared: Mapping[str, Any]) -> LifecycleResult:
        op = Operation.UPDATE
        identifier = declared.get("id")
        missing = self._missing_id(op, identifier)
        if missing is not None:
            return self._failed(op, [missing])

        problems = self.kind.schema.validate_declared(declared, op)
        if problems:
            return self._failed(op, problems)

        ident = identifier or ""
        try:
            body = self.kind.codec.encode_update(declared)
        except ValueError as exc:
            return self._failed(op, [self._unexpected(op, ident, exc)])

        response, diagnostic = self._call(op, ident, partial(self.kind.endpoints.update, self._api, ident, body))
        if diagnostic is not None:
            return self._failed(op, [diagnostic])

        remote, diagnostic = self._decode(op, ident, response)
        if diagnostic is not None:
            return self._failed(op, [diagnostic])
        return self._succeeded(op, remote)

    def delete(self, identifier: str | None, state: Mapping[str, Any] | None = None) -> LifecycleResult:
        """Delete the entity; singletons without a delete endpoint get an update instead."""

        op = Operation.DELETE
        missing = self._missing_id(op, identifier)
        if missing is not None:
            return self._failed(op, [missing])

        ident = identifier or ""
        endpoints = self.kind.endpoints
        if isinstance(endpoints, DeletableBinding):
            call: Callable[[], ApiResponse] = partial(endpoints.delete, self._api, ident)
        else:
            codec = self.kind.codec
            if not isinstance(codec, SingletonCodec):
                raise TypeError(f"{self.kind.name} has no delete endpoint and no encode_delete()")
            body = codec.encode_delete(state or {})
            call = partial(endpoints.update, self._api, ident, body)

        _, diagnostic = self._call(op, ident, call)
        if diagnostic is not None:
            return self._failed(op, [diagnostic])
        return self._succeeded(op, None)

    def import_state(self, identifier: str) -> LifecycleResult:
        """Adopt an existing remote entity; the next read fills the attributes."""

        op = Operation.IMPORT
        summary = f"Error importing {self.kind.label}"
        if not isinstance(identifier, str):
            detail = f"An import id must be a string, got {type(identifier).__name__}."
            return self._failed(op, [Diagnostic(summary=summary, detail=detail)])
        if not identifier:
            return self._failed(op, [Diagnostic(summary=summary, detail="An import id is required.")])
        return self._succeeded(op, {"id": identifier})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _missing_id(self, op: Operation, identifier: Any) -> Diagnostic | None:
        summary, lead = error_subject(op, self.kind.label, None)
        if identifier is not None and not isinstance(identifier, str):
            return Diagnostic(
                summary=summary,
                detail=f"{lead}: the id attribute must be a string, got {type(identifier).__name__}.",
            )
        if identifier or not self.kind.endpoints.requires_id:
            return None
        return Diagnostic(summary=summary, detail=f"{lead}: the id attribute is not set.")

    def _call(
        self,
        op: Operation,
        identifier: str | None,
        fn: Callable[[], ApiResponse],
    ) -> tuple[ApiResponse | None, Diagnostic | None]:
        transition = TRANSITIONS[op][0]
        logger.debug("%s %s: %s", self.kind.label, identifier or "-", transition.value if transition else op.value)
        try:
            response = fn()
        except httpx.HTTPError as exc:
            return None, classify(op, self.kind.label, identifier, None, exc)
        return response, classify(op, self.kind.label, identifier, response, None)

    def _decode(
        self,
        op: Operation,
        identifier: str | None,
        response: ApiResponse | None,
    ) -> tuple[dict[str, Any], Diagnostic | None]:
        payload = response.payload() if response is not None else None
        try:
            remote = self.kind.codec.decode(payload)
        except DecodeError as exc:
            summary, lead = error_subject(op, self.kind.label, identifier)
            return {}, Diagnostic(summary=summary, detail=f"{lead}: {exc}")
        logger.debug("%s %s decoded: %r", op.value, self.kind.label, remote)
        return remote, None

    def _unexpected(self, op: Operation, identifier: str | None, exc: Exception) -> Diagnostic:
        summary, lead = error_subject(op, self.kind.label, identifier)
        return Diagnostic(summary=summary, detail=f"{lead}, unexpected error: {exc}")

    def _failed(self, op: Operation, diagnostics: list[Diagnostic]) -> LifecycleResult:
        for d in diagnostics:
            logger.debug("%s", d)
        return LifecycleResult(operation=op, resource=self.kind.name, diagnostics=diagnostics)

    def _succeeded(self, op: Operation, state: dict[str, Any] | None) -> LifecycleResult:
        return LifecycleResult(
            operation=op,
            resource=self.kind.name,
            state=state,
            lifecycle=TRANSITIONS[op][1],
        )
