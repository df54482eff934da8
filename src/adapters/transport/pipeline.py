"""Composición del pipeline de transporte.

Orden fijo (de fuera hacia dentro): retry -> debug -> recorder -> base.
- Cada intento de retry pasa por debug y queda grabado.
- Cada capa se activa por separado sin cambiar el comportamiento de las otras.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx

from adapters.transport.debug import DebugTransport
from adapters.transport.recorder import RecorderTransport
from adapters.transport.retry import RetryTransport
from core.config import AppSettings, RecorderMode


@dataclass(frozen=True)
class RecorderOptions:
    cassette: Path
    mode: RecorderMode = RecorderMode.RECORD_ONCE


@dataclass(frozen=True)
class TransportOptions:
    max_retries: int = 0
    retry_wait_min: float = 1.0
    retry_wait_max: float = 30.0
    debug: bool = False
    recorder: RecorderOptions | None = None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "TransportOptions":
        recorder = None
        if settings.cassette is not None:
            recorder = RecorderOptions(
                cassette=settings.cassette,
                mode=settings.recorder_mode or RecorderMode.RECORD_ONCE,
            )
        return cls(max_retries=settings.max_retries, debug=settings.debug, recorder=recorder)


def build_transport(
    options: TransportOptions,
    base: httpx.BaseTransport | None = None,
) -> httpx.BaseTransport:
    transport: httpx.BaseTransport = base or httpx.HTTPTransport()

    if options.recorder is not None:
        transport = RecorderTransport(transport, options.recorder.cassette, options.recorder.mode)
    if options.debug:
        transport = DebugTransport(transport)
    if options.max_retries > 0:
        transport = RetryTransport(
            transport,
            max_retries=options.max_retries,
            wait_min=options.retry_wait_min,
            wait_max=options.retry_wait_max,
        )
    return transport
