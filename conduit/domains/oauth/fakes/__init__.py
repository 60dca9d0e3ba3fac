"""Fake implementations for OAuth domain testing."""

from conduit.domains.oauth.fakes.flow import FakeOAuthFlow

__all__ = ["FakeOAuthFlow"]
