"""
Shared pytest fixtures for the medusa-sync test suite.

The Admin API is replaced by `FakeMedusa`, an in-memory server plugged into
`httpx.MockTransport`, so the whole stack (transport pipeline, login, codecs,
lifecycle controller) runs without a network.
"""

from __future__ import annotations

import itertools
import json
import os
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings
from core.services.provider import Provider

BASE_URL = "http://medusa.test"
ADMIN_EMAIL = "admin@medusa-test.com"
ADMIN_PASSWORD = "supersecret"
TOKEN = "tok_test_123"

# path -> (envelope, id prefix)
COLLECTIONS: dict[str, tuple[str, str]] = {
    "/admin/regions": ("region", "reg"),
    "/admin/sales-channels": ("sales_channel", "sc"),
    "/admin/collections": ("collection", "pcol"),
    "/admin/product-categories": ("product_category", "pcat"),
    "/admin/shipping-profiles": ("shipping_profile", "sp"),
    "/admin/customer-groups": ("customer_group", "cusgroup"),
}


def _slug(value: str) -> str:
    return "-".join(value.lower().split())


class FakeMedusa:
    """In-memory Medusa Admin API.

    Entities are stored in their wire (request) shape and rendered the way
    the real API answers: regions expand provider ids into objects, the store
    expands currency codes, handles are generated server-side.
    """

    def __init__(self) -> None:
        self.entities: dict[str, dict[str, dict[str, Any]]] = {path: {} for path in COLLECTIONS}
        self.store: dict[str, Any] = {
            "id": "store_01",
            "name": "Medusa Store",
            "default_currency_code": "usd",
            "currencies": ["usd"],
            "swap_link_template": "https://shop.test/swap/{cart_id}",
            "payment_link_template": "https://shop.test/pay/{cart_id}",
            "invite_link_template": "https://shop.test/invite/{invite_token}",
        }
        self.requests: list[httpx.Request] = []
        self.overrides: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self._ids = itertools.count(1)

    # -- test helpers ---------------------------------------------------

    def fail(self, method: str, path: str, status: int, body: Any = None) -> None:
        """Answer `method path` with `status` until `clear()` is called."""

        def respond(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status)
            if isinstance(body, (bytes, str)):
                return httpx.Response(status, content=body)
            return httpx.Response(status, json=body)

        self.overrides[(method, path)] = respond

    def clear(self) -> None:
        self.overrides.clear()

    def bodies(self, method: str, path: str) -> list[Any]:
        return [
            json.loads(r.content) if r.content else None
            for r in self.requests
            if r.method == method and r.url.path == path
        ]

    def seed(self, path: str, entity: dict[str, Any]) -> str:
        _, prefix = COLLECTIONS[path]
        identifier = entity.get("id") or f"{prefix}_{next(self._ids):04d}"
        self.entities[path][identifier] = {**entity, "id": identifier}
        return identifier

    # -- server ----------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        override = self.overrides.get((request.method, path))
        if override is not None:
            return override(request)

        if path == "/admin/auth/token" and request.method == "POST":
            return self._login(request)

        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, json={"type": "unauthorized", "message": "Unauthorized"})

        if path == "/admin/store":
            return self._store(request)

        for collection, (envelope, _) in COLLECTIONS.items():
            if path == collection:
                if request.method == "POST":
                    return self._create(collection, envelope, request)
                break
            if path.startswith(collection + "/"):
                identifier = path[len(collection) + 1 :]
                return self._item(collection, envelope, identifier, request)

        return httpx.Response(404, json={"type": "not_found", "message": f"Route {path} not found"})

    def _login(self, request: httpx.Request) -> httpx.Response:
        data = json.loads(request.content or b"{}")
        if data.get("email") == ADMIN_EMAIL and data.get("password") == ADMIN_PASSWORD:
            return httpx.Response(200, json={"access_token": TOKEN})
        return httpx.Response(401, json={"type": "unauthorized", "message": "Invalid credentials"})

    def _create(self, collection: str, envelope: str, request: httpx.Request) -> httpx.Response:
        data = json.loads(request.content or b"{}")
        identifier = self.seed(collection, data)
        return httpx.Response(200, json={envelope: self._render(collection, self.entities[collection][identifier])})

    def _item(self, collection: str, envelope: str, identifier: str, request: httpx.Request) -> httpx.Response:
        entity = self.entities[collection].get(identifier)
        if entity is None:
            return httpx.Response(
                404,
                json={"type": "not_found", "message": f"{envelope} with id {identifier} was not found"},
            )
        if request.method == "GET":
            return httpx.Response(200, json={envelope: self._render(collection, entity)})
        if request.method == "POST":
            entity.update(json.loads(request.content or b"{}"))
            return httpx.Response(200, json={envelope: self._render(collection, entity)})
        if request.method == "DELETE":
            del self.entities[collection][identifier]
            return httpx.Response(200, json={"id": identifier, "object": envelope, "deleted": True})
        return httpx.Response(405)

    def _store(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            self.store.update(json.loads(request.content or b"{}"))
        elif request.method != "GET":
            return httpx.Response(405)
        rendered = {**self.store, "currencies": [{"code": c} for c in self.store.get("currencies") or []]}
        return httpx.Response(200, json={"store": rendered})

    def _render(self, collection: str, entity: dict[str, Any]) -> dict[str, Any]:
        out = dict(entity)
        if collection == "/admin/regions":
            out["payment_providers"] = [{"id": p, "is_installed": True} for p in entity.get("payment_providers", [])]
            out["fulfillment_providers"] = [
                {"id": p, "is_installed": True} for p in entity.get("fulfillment_providers", [])
            ]
            out["countries"] = [
                {"id": n, "iso_2": c, "iso_3": c + "x", "name": c.upper()}
                for n, c in enumerate(entity.get("countries", []), start=1)
            ]
            out.setdefault("includes_tax", False)
            out.setdefault("tax_code", None)
        elif collection == "/admin/collections":
            out.setdefault("handle", _slug(entity["title"]))
        elif collection == "/admin/product-categories":
            out.setdefault("handle", _slug(entity["name"]))
            out.setdefault("is_internal", False)
            out.setdefault("is_active", False)
        elif collection == "/admin/sales-channels":
            out.setdefault("is_disabled", False)
        out.setdefault("created_at", "2024-01-01T00:00:00.000Z")
        return out


REGION_DECLARED: dict[str, Any] = {
    "name": "Europe",
    "currency_code": "eur",
    "tax_rate": 0.19,
    "payment_providers": ["manual"],
    "fulfillment_providers": ["manual"],
    "countries": ["de", "fr"],
}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No MEDUSA_* variables or .env files from the developer machine leak in."""

    for key in list(os.environ):
        if key.startswith("MEDUSA_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake() -> FakeMedusa:
    return FakeMedusa()


@pytest.fixture
def mock_transport(fake: FakeMedusa) -> httpx.MockTransport:
    return httpx.MockTransport(fake.handler)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        url=BASE_URL,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        max_retries=0,
    )


@pytest.fixture
def provider(settings: AppSettings, mock_transport: httpx.MockTransport):
    with Provider(settings, base_transport=mock_transport) as p:
        p.configure()
        yield p


@pytest.fixture
def region_declared() -> dict[str, Any]:
    return json.loads(json.dumps(REGION_DECLARED))
