"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y el transporte (retry/debug/recorder) que
  comparten todos los clientes.
- Facilita testeo: se puede sustituir el transporte por `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

USER_AGENT = "medusa-sync/0.1"


def build_client(
    settings: AppSettings | None = None,
    *,
    base_url: str,
    transport: httpx.BaseTransport | None = None,
    auth: httpx.Auth | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué un builder:
    - El cliente sin autenticar (login) y el autenticado deben ser idénticos
      salvo por `auth`; construir ambos aquí garantiza eso.
    - Los hilos del host comparten el cliente: httpx.Client es thread-safe
      mientras nadie lo reconfigure.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
    return httpx.Client(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
        auth=auth,
    )
