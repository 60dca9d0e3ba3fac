"""Pydantic schemas for the connector catalog and OAuth flows."""

from conduit.schemas.connector import (
    ActorDefinitionVersion,
    ActorType,
    AdvancedAuth,
    ConnectorDefinition,
    ConnectorInstance,
    ConnectorSpecification,
    OAuthConfigSpecification,
    OAuthParameter,
    has_oauth_config_specification,
)
from conduit.schemas.oauth import (
    CompleteOAuthRequest,
    CompleteOAuthResponse,
    InstancewideOAuthParamsRequest,
    OAuthConsentRead,
    OAuthConsentRequest,
)

__all__ = [
    "ActorDefinitionVersion",
    "ActorType",
    "AdvancedAuth",
    "CompleteOAuthRequest",
    "CompleteOAuthResponse",
    "ConnectorDefinition",
    "ConnectorInstance",
    "ConnectorSpecification",
    "InstancewideOAuthParamsRequest",
    "OAuthConfigSpecification",
    "OAuthConsentRead",
    "OAuthConsentRequest",
    "OAuthParameter",
    "has_oauth_config_specification",
]
