"""
Tests for the store singleton: create and delete are updates.
"""

from adapters.resources.region import REGION
from adapters.resources.store import STORE, TEMPLATE_FIELDS
from core.domain.models import LifecycleState
from core.interfaces import DeletableBinding


class TestStore:
    def test_read_without_id(self, provider):
        result = provider.controller("store").read("")

        assert not result.has_error
        assert result.state["id"] == "store_01"
        assert result.state["currencies"] == ["usd"]

    def test_create_is_an_update_of_the_singleton(self, provider, fake):
        declared = {"default_currency_code": "eur", "currencies": ["eur", "usd"]}

        result = provider.controller("store").create(declared)

        assert not result.has_error
        assert result.state["id"] == "store_01"
        assert result.state["currencies"] == ["eur", "usd"]
        assert fake.bodies("POST", "/admin/store") == [declared]

    def test_delete_resets_link_templates_to_null(self, provider, fake):
        result = provider.controller("store").delete("store_01")

        assert not result.has_error
        assert result.lifecycle is LifecycleState.UNMANAGED
        body = fake.bodies("POST", "/admin/store")[0]
        assert body == {name: None for name in TEMPLATE_FIELDS}
        assert fake.store["default_currency_code"] == "usd"
        assert all(fake.store[name] is None for name in TEMPLATE_FIELDS)
        assert not [r for r in fake.requests if r.method == "DELETE"]

    def test_delete_failure_is_reported(self, provider, fake):
        fake.fail("POST", "/admin/store", 500, {"message": "store locked"})

        result = provider.controller("store").delete("store_01")

        assert result.has_error
        assert result.diagnostics[0].summary == "Error deleting store"
        assert result.diagnostics[0].detail.startswith("Could not delete store, status code: 500 (")
        assert "store locked" in result.diagnostics[0].detail

    def test_create_requires_default_currency(self, provider):
        result = provider.controller("store").create({"name": "Shop"})
        assert result.has_error

    def test_store_endpoints_have_no_delete(self):
        assert not isinstance(STORE.endpoints, DeletableBinding)
        assert not hasattr(STORE.endpoints, "delete")
        assert isinstance(REGION.endpoints, DeletableBinding)
