"""Unit tests for OAuthFlowRegistry."""

import pytest

from conduit.domains.oauth.exceptions import OAuthProviderNotSupportedError
from conduit.domains.oauth.fakes.flow import FakeOAuthFlow
from conduit.domains.oauth.registry import OAuthFlowRegistry


def _build_registry(flows):
    registry = OAuthFlowRegistry()
    registry.build(flows)
    return registry


class TestOAuthFlowRegistry:
    def test_get_registered_flow(self):
        flow = FakeOAuthFlow()
        registry = _build_registry({"conduit/source-github": flow})

        assert registry.get("conduit/source-github") is flow

    def test_unknown_provider_raises(self):
        registry = _build_registry({})

        with pytest.raises(OAuthProviderNotSupportedError) as exc_info:
            registry.get("conduit/source-unknown")

        assert exc_info.value.provider == "conduit/source-unknown"
        assert "conduit/source-unknown" in str(exc_info.value)

    def test_list_all(self):
        registry = _build_registry(
            {"conduit/source-a": FakeOAuthFlow(), "conduit/destination-b": FakeOAuthFlow()}
        )
        assert sorted(registry.list_all()) == ["conduit/destination-b", "conduit/source-a"]

    def test_duplicate_registration_rejected(self):
        registry = _build_registry({"conduit/source-a": FakeOAuthFlow()})

        with pytest.raises(ValueError, match="already registered"):
            registry.register("conduit/source-a", FakeOAuthFlow())
