"""Protocols for OAuth domain dependencies."""

from typing import Any, Dict, Optional, Protocol
from uuid import UUID

from conduit.schemas.connector import OAuthConfigSpecification
from conduit.schemas.oauth import (
    CompleteOAuthRequest,
    CompleteOAuthResponse,
    InstancewideOAuthParamsRequest,
    OAuthConsentRead,
    OAuthConsentRequest,
)


class OAuthFlowImplementation(Protocol):
    """Provider-specific OAuth flow (consent URL + code exchange).

    One implementation per provider, selected by the connector's docker
    repository. The wire protocol lives entirely behind this interface.
    """

    async def get_source_consent_url(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        redirect_url: str,
        input_configuration: Dict[str, Any],
        oauth_config_specification: Optional[OAuthConfigSpecification],
    ) -> str:
        """Build the consent URL for a source."""
        ...

    async def get_destination_consent_url(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        redirect_url: str,
        input_configuration: Dict[str, Any],
        oauth_config_specification: Optional[OAuthConfigSpecification],
    ) -> str:
        """Build the consent URL for a destination."""
        ...

    async def complete_source_oauth(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        query_params: Dict[str, Any],
        redirect_url: str,
        input_configuration: Optional[Dict[str, Any]] = None,
        oauth_config_specification: Optional[OAuthConfigSpecification] = None,
    ) -> Dict[str, Any]:
        """Exchange the provider callback for tokens for a source.

        Called without ``input_configuration`` and ``oauth_config_specification``
        for connectors that do not declare an OAuth config specification.
        """
        ...

    async def complete_destination_oauth(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        query_params: Dict[str, Any],
        redirect_url: str,
        input_configuration: Optional[Dict[str, Any]] = None,
        oauth_config_specification: Optional[OAuthConfigSpecification] = None,
    ) -> Dict[str, Any]:
        """Exchange the provider callback for tokens for a destination."""
        ...


class OAuthFlowRegistryProtocol(Protocol):
    """Lookup table of OAuth flows keyed by provider identifier."""

    def get(self, provider: str) -> OAuthFlowImplementation:
        """Get the flow for a provider. Raises OAuthProviderNotSupportedError if missing."""
        ...

    def list_all(self) -> list[str]:
        """List registered provider identifiers."""
        ...


class OAuthHandlerServiceProtocol(Protocol):
    """OAuth consent and completion orchestration for sources and destinations."""

    async def get_source_oauth_consent(self, request: OAuthConsentRequest) -> OAuthConsentRead:
        """Consent URL for a source."""
        ...

    async def get_destination_oauth_consent(
        self, request: OAuthConsentRequest
    ) -> OAuthConsentRead:
        """Consent URL for a destination."""
        ...

    async def complete_source_oauth(self, request: CompleteOAuthRequest) -> CompleteOAuthResponse:
        """Complete a source OAuth flow."""
        ...

    async def complete_source_oauth_handle_return_secret(
        self, request: CompleteOAuthRequest
    ) -> CompleteOAuthResponse:
        """Complete a source OAuth flow, optionally returning a secret coordinate."""
        ...

    async def complete_destination_oauth(
        self, request: CompleteOAuthRequest
    ) -> CompleteOAuthResponse:
        """Complete a destination OAuth flow."""
        ...

    async def set_source_instancewide_oauth_params(
        self, request: InstancewideOAuthParamsRequest
    ) -> None:
        """Store instance-wide OAuth parameters for a source definition."""
        ...

    async def set_destination_instancewide_oauth_params(
        self, request: InstancewideOAuthParamsRequest
    ) -> None:
        """Store instance-wide OAuth parameters for a destination definition."""
        ...

    async def write_oauth_response_secret(
        self, workspace_id: UUID, payload: CompleteOAuthResponse
    ) -> CompleteOAuthResponse:
        """Store an OAuth response as a secret and return its coordinate."""
        ...
