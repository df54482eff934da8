"""Host-facing provider.

Wires configuration, the transport pipeline, the login bootstrap and the
resource registry together. A host (orchestrator, CLI, tests) creates one
provider per run, configures it once and then asks it for controllers:

    with Provider(settings) as provider:
        provider.configure()
        result = provider.controller("region").read("reg_123")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx

from adapters.auth import Session, bootstrap
from adapters.resources import ALL_RESOURCES
from adapters.transport import TransportOptions, build_transport
from core.config import AppSettings
from core.domain.models import Credentials
from core.errors import ConfigurationError
from core.interfaces.resource import ResourceKind
from core.services.lifecycle import ResourceLifecycleController

logger = logging.getLogger(__name__)

_ENV_NAMES = {
    "url": "MEDUSA_URL",
    "email": "MEDUSA_ADMIN_EMAIL",
    "password": "MEDUSA_ADMIN_PASSWORD",
}


def mask(value: str | None) -> str:
    if not value:
        return "<unset>"
    return value[0] + "***"


def resolve_credentials(
    settings: AppSettings,
    *,
    url: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> Credentials:
    """Explicit values win over the environment; anything missing is an error."""

    resolved = {
        "url": url if url is not None else settings.url,
        "email": email if email is not None else settings.admin_email,
        "password": (
            password
            if password is not None
            else (settings.admin_password.get_secret_value() if settings.admin_password else None)
        ),
    }
    missing = [name for name, value in resolved.items() if not value]
    if missing:
        hints = ", ".join(f"{name} (or {_ENV_NAMES[name]})" for name in missing)
        raise ConfigurationError(
            f"Missing Medusa provider configuration: {hints}. "
            "Set the value explicitly or through the environment.",
            missing=missing,
        )
    return Credentials(base_url=resolved["url"], identity=resolved["email"], secret=resolved["password"])


class Provider:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        options: TransportOptions | None = None,
        base_transport: httpx.BaseTransport | None = None,
        resources: Iterable[ResourceKind] = ALL_RESOURCES,
    ) -> None:
        self.settings = settings or AppSettings()
        self.options = options or TransportOptions.from_settings(self.settings)
        self._base_transport = base_transport
        self._resources = {kind.name: kind for kind in resources}
        self._session: Session | None = None
        self._controllers: dict[str, ResourceLifecycleController] = {}

    def resources(self) -> list[ResourceKind]:
        return list(self._resources.values())

    def kind(self, name: str) -> ResourceKind:
        try:
            return self._resources[name]
        except KeyError:
            known = ", ".join(sorted(self._resources))
            raise ConfigurationError(f"Unknown resource kind {name!r}. Known kinds: {known}.") from None

    def configure(
        self,
        *,
        url: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> Session:
        """Log in and build one controller per resource kind. Raises `AuthError`."""

        if self._session is not None:
            raise ConfigurationError("Provider is already configured.")

        logger.info("Configuring Medusa client")
        credentials = resolve_credentials(self.settings, url=url, email=email, password=password)
        logger.info(
            "Creating Medusa client medusa_url=%s medusa_email=%s medusa_password=***",
            credentials.base_url,
            mask(credentials.identity),
        )

        transport = build_transport(self.options, self._base_transport)
        try:
            session = bootstrap(credentials, transport=transport, settings=self.settings)
        except Exception:
            transport.close()
            raise

        self._controllers = {
            name: ResourceLifecycleController(kind, session.api) for name, kind in self._resources.items()
        }
        self._session = session
        logger.info("Configured Medusa client (%d resource kinds)", len(self._controllers))
        return session

    @property
    def session(self) -> Session:
        if self._session is None:
            raise ConfigurationError("Provider is not configured; call configure() first.")
        return self._session

    def controller(self, name: str) -> ResourceLifecycleController:
        self.kind(name)
        if self._session is None:
            raise ConfigurationError("Provider is not configured; call configure() first.")
        return self._controllers[name]

    def close(self) -> None:
        if self._session is not None:
            self._session.close()

    def __enter__(self) -> "Provider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
