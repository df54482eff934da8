"""Contratos de respuestas y cliente de la Admin API.

Por qué Protocol:
- Cada tipo de recurso decodifica un payload distinto, pero todas las
  respuestas exponen el mismo "capability": status + body crudo.
- El clasificador de errores depende solo de esa capacidad, no de un tipo
  concreto de respuesta.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RawBodyResponse(Protocol):
    """Capacidad mínima que el clasificador necesita de una respuesta."""

    @property
    def status_code(self) -> int:
        ...

    def raw_body(self) -> bytes | None:
        """Body crudo tal como llegó del servidor (None si no hay)."""

        ...


@runtime_checkable
class ApiResponse(RawBodyResponse, Protocol):
    def payload(self) -> Any | None:
        """JSON decodificado, o None si el body está vacío o no es JSON."""

        ...


class AdminApi(Protocol):
    """Cliente autenticado de la Admin API.

    Reglas de diseño:
    - Bloqueante: cada llamada retiene el hilo hasta la respuesta.
    - Fallos de red se propagan como `httpx.HTTPError`; status no-2xx NO son
      excepciones (se clasifican después).
    """

    def call(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> ApiResponse:
        ...
