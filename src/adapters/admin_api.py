"""Cliente de la Admin API de Medusa sobre httpx.

Responsabilidad:
- Emitir requests JSON contra rutas relativas (`/admin/...`).
- Envolver cada respuesta en `HttpApiResponse`, que implementa la capacidad
  `raw_body()` usada por el clasificador de errores.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass(frozen=True)
class HttpApiResponse:
    status_code: int
    body: bytes = b""

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "HttpApiResponse":
        return cls(
            status_code=response.status_code,
            body=response.content,
        )

    def raw_body(self) -> bytes | None:
        return self.body or None

    def payload(self) -> Any | None:
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError:
            return None


class HttpAdminApi:
    """Implementación de `core.interfaces.api.AdminApi` sobre un `httpx.Client`.

    Los fallos de red (`httpx.HTTPError`) se propagan sin tocar; los status
    no-2xx se devuelven como respuesta normal.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def call(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> HttpApiResponse:
        response = self._client.request(method, path, json=json)
        return HttpApiResponse.from_httpx(response)
