"""Pipeline de transporte httpx (retry, debug, grabación).

Por qué un paquete:
- Cada capa es un `httpx.BaseTransport` que envuelve al siguiente.
- Todos los clientes (login y sesión) comparten la misma cadena.
"""

from adapters.transport.debug import DebugTransport
from adapters.transport.pipeline import RecorderOptions, TransportOptions, build_transport
from adapters.transport.recorder import Cassette, InteractionNotFound, RecorderTransport
from adapters.transport.retry import RetryTransport

__all__ = [
    "Cassette",
    "DebugTransport",
    "InteractionNotFound",
    "RecorderOptions",
    "RecorderTransport",
    "RetryTransport",
    "TransportOptions",
    "build_transport",
]
