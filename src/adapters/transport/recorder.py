"""Grabación/reproducción de interacciones HTTP (cassettes YAML).

Modos:
- record: siempre llama al transporte real y captura cada interacción.
- replay: nunca sale a la red; una request sin grabación es un error.
- record_once: replay si el cassette existe, record si no.

Invariante de scrubbing (se aplica ANTES de persistir):
- Headers de request: ninguno.
- Headers de response: solo `Content-Type`.
- Campos JSON sensibles (password, access_token): `[REDACTED]`.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Callable

import httpx
import yaml

from core.config import RecorderMode
from core.errors import CassetteError

CASSETTE_VERSION = 1
REDACTED = "[REDACTED]"
SENSITIVE_FIELDS = ("password", "access_token")

Interaction = dict[str, Any]
InteractionHook = Callable[[Interaction], None]


class InteractionNotFound(httpx.TransportError):
    """Replay sin interacción grabada para la request."""


def clean_headers(headers: dict[str, str], *keep: str) -> dict[str, str]:
    wanted = {k.lower() for k in keep}
    return {k: v for k, v in headers.items() if k.lower() in wanted}


def scrub_headers(interaction: Interaction) -> None:
    interaction["request"]["headers"] = clean_headers(interaction["request"]["headers"])
    interaction["response"]["headers"] = clean_headers(interaction["response"]["headers"], "Content-Type")


def _redact(value: Any, fields: frozenset[str]) -> Any:
    if isinstance(value, dict):
        return {k: (REDACTED if k in fields else _redact(v, fields)) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(v, fields) for v in value]
    return value


def redact_body_fields(*fields: str) -> InteractionHook:
    """Hook que reemplaza campos JSON sensibles en los bodies de request/response."""

    targets = frozenset(fields)

    def hook(interaction: Interaction) -> None:
        for side in ("request", "response"):
            body = interaction[side].get("body")
            if not body:
                continue
            try:
                data = json.loads(body)
            except ValueError:
                continue
            interaction[side]["body"] = json.dumps(_redact(data, targets), separators=(",", ":"))

    return hook


DEFAULT_HOOKS: tuple[InteractionHook, ...] = (
    scrub_headers,
    redact_body_fields(*SENSITIVE_FIELDS),
)


def cassette_file(path: Path) -> Path:
    return path if path.suffix else path.with_suffix(".yaml")


class Cassette:
    """Secuencia de interacciones persistida como YAML."""

    def __init__(self, path: Path, interactions: list[Interaction] | None = None) -> None:
        self.path = cassette_file(path)
        self.interactions: list[Interaction] = interactions or []
        self._used: set[int] = set()

    @classmethod
    def load(cls, path: Path) -> "Cassette":
        file = cassette_file(path)
        try:
            data = yaml.safe_load(file.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CassetteError(f"cannot read cassette {file}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise CassetteError(f"invalid cassette {file}: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("interactions"), list):
            raise CassetteError(f"invalid cassette {file}: missing 'interactions'")
        return cls(file, list(data["interactions"]))

    def add(self, interaction: Interaction) -> None:
        interaction["id"] = len(self.interactions)
        self.interactions.append(interaction)

    def find(self, method: str, url: str) -> Interaction | None:
        """Primera interacción no usada con el mismo método + URL (la marca como usada)."""

        for index, interaction in enumerate(self.interactions):
            if index in self._used:
                continue
            req = interaction.get("request") or {}
            if req.get("method") == method and req.get("url") == url:
                self._used.add(index)
                return interaction
        return None

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": CASSETTE_VERSION, "interactions": self.interactions}
        self.path.write_text(
            yaml.safe_dump(payload, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
        return self.path


def capture(request: httpx.Request, response: httpx.Response) -> Interaction:
    return {
        "request": {
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "body": request.read().decode("utf-8", errors="replace"),
        },
        "response": {
            "status": response.status_code,
            "headers": dict(response.headers),
            "body": response.read().decode("utf-8", errors="replace"),
        },
    }


class RecorderTransport(httpx.BaseTransport):
    def __init__(
        self,
        transport: httpx.BaseTransport,
        cassette: Path,
        mode: RecorderMode = RecorderMode.RECORD_ONCE,
        *,
        hooks: Iterable[InteractionHook] = DEFAULT_HOOKS,
    ) -> None:
        self._transport = transport
        self._hooks = tuple(hooks)
        self._lock = threading.Lock()

        file = cassette_file(cassette)
        if mode is RecorderMode.RECORD_ONCE:
            mode = RecorderMode.REPLAY if file.exists() else RecorderMode.RECORD
        self.mode = mode
        self.cassette = Cassette.load(file) if mode is RecorderMode.REPLAY else Cassette(file)

    @property
    def recording(self) -> bool:
        return self.mode is RecorderMode.RECORD

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if not self.recording:
            return self._replay(request)

        response = self._transport.handle_request(request)
        interaction = capture(request, response)
        for hook in self._hooks:
            hook(interaction)
        with self._lock:
            self.cassette.add(interaction)
        return response

    def _replay(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            interaction = self.cassette.find(request.method, str(request.url))
        if interaction is None:
            raise InteractionNotFound(
                f"no recorded interaction for {request.method} {request.url} in {self.cassette.path}",
                request=request,
            )
        recorded = interaction["response"]
        return httpx.Response(
            status_code=int(recorded["status"]),
            headers=recorded.get("headers") or {},
            content=(recorded.get("body") or "").encode("utf-8"),
            request=request,
        )

    def close(self) -> None:
        try:
            if self.recording:
                with self._lock:
                    self.cassette.save()
        finally:
            self._transport.close()
