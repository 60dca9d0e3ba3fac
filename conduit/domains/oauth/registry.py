"""OAuth flow registry: in-memory lookup table built once at startup."""

from typing import Mapping

from conduit.core.logging import logger
from conduit.domains.oauth.exceptions import OAuthProviderNotSupportedError
from conduit.domains.oauth.protocols import OAuthFlowImplementation

registry_logger = logger.with_prefix("OAuthFlowRegistry: ").with_context(
    component="oauth_flow_registry"
)


class OAuthFlowRegistry:
    """Maps provider identifiers (connector docker repositories) to OAuth flows."""

    def __init__(self) -> None:
        """Initialize the OAuth flow registry."""
        self._flows: dict[str, OAuthFlowImplementation] = {}

    def get(self, provider: str) -> OAuthFlowImplementation:
        """Get the OAuth flow for a provider.

        Args:
            provider: Provider identifier, e.g. "conduit/source-google-sheets".

        Returns:
            The registered flow implementation.

        Raises:
            OAuthProviderNotSupportedError: If no flow is registered for the provider.
        """
        try:
            return self._flows[provider]
        except KeyError:
            raise OAuthProviderNotSupportedError(provider) from None

    def list_all(self) -> list[str]:
        """List registered provider identifiers."""
        return list(self._flows)

    def register(self, provider: str, flow: OAuthFlowImplementation) -> None:
        """Register a single flow.

        Raises:
            ValueError: If the provider already has a flow.
        """
        if provider in self._flows:
            raise ValueError(f"OAuth flow already registered for '{provider}'")
        self._flows[provider] = flow

    def build(self, flows: Mapping[str, OAuthFlowImplementation]) -> None:
        """Register every flow in ``flows``. Called once at startup."""
        for provider, flow in flows.items():
            self.register(provider, flow)

        registry_logger.info(f"Built registry with {len(self._flows)} OAuth flows.")
