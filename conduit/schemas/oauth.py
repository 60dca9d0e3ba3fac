"""OAuth request and response schemas."""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class OAuthConsentRequest(BaseModel):
    """Request for a provider consent URL."""

    definition_id: UUID
    workspace_id: UUID
    redirect_url: str
    actor_id: Optional[UUID] = Field(
        None,
        description=(
            "Existing source/destination being re-authenticated. When set, masked "
            "values in oauth_input_configuration are filled from its stored configuration."
        ),
    )
    oauth_input_configuration: Optional[Dict[str, Any]] = None


class CompleteOAuthRequest(OAuthConsentRequest):
    """Request to finish an OAuth flow after the provider redirected back."""

    query_params: Dict[str, Any] = Field(default_factory=dict)
    return_secret_coordinate: bool = Field(
        False,
        description="Store the resulting tokens as a secret and return only its coordinate.",
    )


class InstancewideOAuthParamsRequest(BaseModel):
    """Instance-wide OAuth parameters for a connector definition."""

    definition_id: UUID
    params: Dict[str, Any]


class OAuthConsentRead(BaseModel):
    """Consent URL to send the user to."""

    consent_url: str


class CompleteOAuthResponse(BaseModel):
    """Normalized result of a provider token exchange."""

    request_succeeded: bool = True
    request_error: Optional[str] = None
    auth_payload: Dict[str, Any] = Field(default_factory=dict)
