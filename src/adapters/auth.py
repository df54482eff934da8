"""Bootstrap de autenticación contra la Admin API.

Flujo (dos fases, sin cliente global mutable):
1. Cliente SIN token -> `POST /admin/auth/token` con email/password.
2. Cliente idéntico + `BearerAuth(token)` -> `Session` inmutable.

El login nunca lleva header Authorization. Si falla, no hay sesión y ninguna
operación de recursos puede ejecutarse.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from dataclasses import dataclass, field

import httpx

from adapters.admin_api import HttpAdminApi
from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import Credentials
from core.errors import AuthError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/admin/auth/token"


class BearerAuth(httpx.Auth):
    """Añade `Authorization: Bearer <token>` a cada request saliente."""

    def __init__(self, token: str) -> None:
        self._header = f"Bearer {token}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._header
        yield request


@dataclass(frozen=True)
class Session:
    """Cliente autenticado compartido (solo lectura) por todos los controladores."""

    base_url: str
    bearer_token: str = field(repr=False)
    client: httpx.Client = field(repr=False)

    @property
    def api(self) -> HttpAdminApi:
        return HttpAdminApi(self.client)

    def close(self) -> None:
        self.client.close()


def login(client: httpx.Client, credentials: Credentials) -> str:
    """Intercambia credenciales por un access token."""

    summary = "Unable to Login to Medusa API"
    try:
        response = client.post(
            LOGIN_PATH,
            json={
                "email": credentials.identity,
                "password": credentials.secret.get_secret_value(),
            },
        )
    except httpx.HTTPError as exc:
        raise AuthError(summary, str(exc)) from exc

    if response.status_code != 200:
        raise AuthError(summary, f"login failed: {response.status_code} {response.reason_phrase}")

    try:
        data = response.json()
    except ValueError as exc:
        raise AuthError(summary, f"login response is not JSON: {exc}") from exc

    token = data.get("access_token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthError(summary, "login response carries no access_token")
    return token


def bootstrap(
    credentials: Credentials,
    *,
    transport: httpx.BaseTransport | None = None,
    settings: AppSettings | None = None,
) -> Session:
    """Construye la `Session` autenticada o lanza `AuthError`."""

    settings = settings or AppSettings()

    anonymous = build_client(settings, base_url=credentials.base_url, transport=transport)
    logger.debug("Logging in to %s", credentials.base_url)
    try:
        token = login(anonymous, credentials)
    finally:
        # Con transporte compartido no se cierra: cerraría el pipeline (y el cassette).
        if transport is None:
            anonymous.close()

    client = build_client(
        settings,
        base_url=credentials.base_url,
        transport=transport,
        auth=BearerAuth(token),
    )
    logger.info("Authenticated against %s", credentials.base_url)
    return Session(base_url=credentials.base_url, bearer_token=token, client=client)
