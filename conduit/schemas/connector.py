"""Connector catalog schemas.

A connector definition (e.g. "Google Sheets source") has one or more
versions. Each version ships a docker image and a specification that
describes its configuration and, optionally, how OAuth is wired into it.
Connector instances are configured copies of a definition owned by a
workspace.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ActorType(str, Enum):
    """Side of a connection a connector sits on."""

    SOURCE = "source"
    DESTINATION = "destination"


class OAuthConfigSpecification(BaseModel):
    """JSON schemas describing the inputs and outputs of a connector's OAuth flow."""

    oauth_user_input_from_connector_config_specification: Optional[Dict[str, Any]] = Field(
        None,
        description=(
            "Schema of the fields a user supplies through the connector configuration. "
            "Each property carries a 'path_in_connector_config' locating it in the config."
        ),
    )
    complete_oauth_output_specification: Optional[Dict[str, Any]] = Field(
        None, description="Schema of the values produced by completing the OAuth flow."
    )
    complete_oauth_server_input_specification: Optional[Dict[str, Any]] = Field(
        None, description="Schema of the instance-wide parameters (client id/secret)."
    )
    complete_oauth_server_output_specification: Optional[Dict[str, Any]] = Field(
        None, description="Schema of instance-wide parameters injected back into the config."
    )


class AdvancedAuth(BaseModel):
    """Advanced authentication block of a connector specification."""

    auth_flow_type: str = Field("oauth2.0", description="Flow type, e.g. 'oauth2.0'.")
    predicate_key: Optional[List[str]] = Field(
        None, description="Config path deciding whether the OAuth flow applies."
    )
    predicate_value: Optional[str] = Field(
        None, description="Value at predicate_key that enables the OAuth flow."
    )
    oauth_config_specification: Optional[OAuthConfigSpecification] = None


class ConnectorSpecification(BaseModel):
    """Specification published by a connector version."""

    documentation_url: Optional[str] = None
    connection_specification: Dict[str, Any] = Field(default_factory=dict)
    advanced_auth: Optional[AdvancedAuth] = None


class ConnectorDefinition(BaseModel):
    """Catalog entry for a connector."""

    id: UUID
    name: str
    actor_type: ActorType
    default_version_id: UUID


class ActorDefinitionVersion(BaseModel):
    """One released version of a connector definition."""

    id: UUID
    definition_id: UUID
    docker_repository: str = Field(
        ..., description="Image repository; also the key selecting the OAuth flow."
    )
    docker_image_tag: str
    spec: ConnectorSpecification


class ConnectorInstance(BaseModel):
    """A workspace's configured source or destination."""

    id: UUID
    definition_id: UUID
    workspace_id: UUID
    actor_type: ActorType
    name: str = ""
    configuration: Dict[str, Any] = Field(default_factory=dict)


class OAuthParameter(BaseModel):
    """OAuth parameters (client id/secret, ...) stored for a connector definition.

    ``workspace_id`` is None for instance-wide parameters.
    """

    oauth_parameter_id: UUID
    definition_id: UUID
    actor_type: ActorType
    workspace_id: Optional[UUID] = None
    configuration: Dict[str, Any] = Field(default_factory=dict)


def has_oauth_config_specification(spec: Optional[ConnectorSpecification]) -> bool:
    """Whether a connector declares how OAuth inputs map into its configuration."""
    return (
        spec is not None
        and spec.advanced_auth is not None
        and spec.advanced_auth.oauth_config_specification is not None
    )
