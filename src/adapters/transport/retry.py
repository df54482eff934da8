"""Capa de reintentos del pipeline de transporte.

Política (la misma que usan los clientes "retryable" habituales):
- Reintenta errores de red/timeout y status 429 / 5xx (salvo 501).
- Espera exponencial: `wait_min * 2**intento`, con tope `wait_max` y un poco de
  jitter. Un `Retry-After` numérico en 429/503 tiene prioridad.
- Agotados los reintentos devuelve la última respuesta tal cual (el
  clasificador reporta su status y body) o re-lanza el último error.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


def is_retryable_status(status_code: int) -> bool:
    if status_code == 429:
        return True
    return 500 <= status_code < 600 and status_code != 501


def retry_after_seconds(response: httpx.Response | None) -> float | None:
    if response is None or response.status_code not in (429, 503):
        return None
    value = response.headers.get("retry-after")
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        # Formato HTTP-date: no lo interpretamos, cae al backoff normal.
        return None
    return seconds if seconds >= 0 else None


class RetryTransport(httpx.BaseTransport):
    def __init__(
        self,
        transport: httpx.BaseTransport,
        *,
        max_retries: int = 10,
        wait_min: float = 1.0,
        wait_max: float = 30.0,
        jitter: float = 0.35,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._transport = transport
        self.max_retries = max_retries
        self.wait_min = wait_min
        self.wait_max = wait_max
        self.jitter = jitter
        self._sleep = sleep or time.sleep

    def backoff(self, attempt: int, response: httpx.Response | None = None) -> float:
        retry_after = retry_after_seconds(response)
        if retry_after is not None:
            return min(retry_after, self.wait_max)
        base = min(self.wait_min * (2**attempt), self.wait_max)
        return base + random.uniform(0.0, self.jitter)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        # El body debe estar en memoria para poder reenviarlo.
        request.read()

        attempt = 0
        while True:
            try:
                response = self._transport.handle_request(request)
            except RETRYABLE_ERRORS as exc:
                if attempt >= self.max_retries:
                    raise
                wait = self.backoff(attempt)
                logger.warning(
                    "%s %s failed (%s); retry %d/%d in %.2fs",
                    request.method,
                    request.url,
                    exc,
                    attempt + 1,
                    self.max_retries,
                    wait,
                )
            else:
                if attempt >= self.max_retries or not is_retryable_status(response.status_code):
                    return response
                wait = self.backoff(attempt, response)
                logger.warning(
                    "%s %s returned %d; retry %d/%d in %.2fs",
                    request.method,
                    request.url,
                    response.status_code,
                    attempt + 1,
                    self.max_retries,
                    wait,
                )
                response.close()

            self._sleep(wait)
            attempt += 1

    def close(self) -> None:
        self._transport.close()
