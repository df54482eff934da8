"""Capa de debug: vuelca request/response completos al log.

Nota:
- El volcado es literal (incluye headers Authorization y el body del login).
  Solo se activa con el toggle de entorno `MEDUSA_DEBUG`; el scrubbing de
  secretos es responsabilidad del grabador, no de esta capa.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

LOG_REQUEST_TEMPLATE = """DEBUG:
---[ REQUEST ]--------------------------------------------------------
%s
----------------------------------------------------------------------
"""

LOG_RESPONSE_TEMPLATE = """DEBUG:
---[ RESPONSE ]-------------------------------------------------------
%s
----------------------------------------------------------------------
"""


def _body_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def dump_request(request: httpx.Request) -> str:
    target = request.url.raw_path.decode("ascii", errors="replace")
    lines = [f"{request.method} {target} HTTP/1.1", f"Host: {request.url.netloc.decode('ascii')}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items() if name.lower() != "host")
    return "\n".join(lines) + "\n\n" + _body_text(request.read())


def dump_response(response: httpx.Response) -> str:
    lines = [f"{response.http_version or 'HTTP/1.1'} {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\n".join(lines) + "\n\n" + _body_text(response.read())


class DebugTransport(httpx.BaseTransport):
    def __init__(self, transport: httpx.BaseTransport) -> None:
        self._transport = transport

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        logger.info(LOG_REQUEST_TEMPLATE, dump_request(request))
        try:
            response = self._transport.handle_request(request)
        except httpx.HTTPError as exc:
            logger.info(LOG_RESPONSE_TEMPLATE, exc)
            raise
        logger.info(LOG_RESPONSE_TEMPLATE, dump_response(response))
        return response

    def close(self) -> None:
        self._transport.close()
