"""Protocols for connector catalog dependencies."""

from typing import Optional, Protocol
from uuid import UUID

from conduit.schemas.connector import (
    ActorDefinitionVersion,
    ActorType,
    ConnectorDefinition,
    ConnectorInstance,
    OAuthParameter,
)


class ConnectorDefinitionRepositoryProtocol(Protocol):
    """Read access to source and destination definitions."""

    async def get_definition(
        self, actor_type: ActorType, definition_id: UUID
    ) -> ConnectorDefinition:
        """Get a definition. Raises ConnectorDefinitionNotFoundError if missing."""
        ...


class ActorDefinitionVersionRepositoryProtocol(Protocol):
    """Read access to definition versions and version pins."""

    async def get_version(self, version_id: UUID) -> ActorDefinitionVersion:
        """Get a version. Raises ActorDefinitionVersionNotFoundError if missing."""
        ...

    async def get_pinned_version_id(
        self,
        definition_id: UUID,
        *,
        workspace_id: Optional[UUID] = None,
        actor_id: Optional[UUID] = None,
    ) -> Optional[UUID]:
        """Return the version pinned for an actor or a workspace, if any."""
        ...


class ConnectorInstanceRepositoryProtocol(Protocol):
    """Read access to configured sources and destinations."""

    async def get_instance(self, actor_type: ActorType, actor_id: UUID) -> ConnectorInstance:
        """Get an instance with secret references left in place."""
        ...

    async def get_instance_with_secrets(
        self, actor_type: ActorType, actor_id: UUID
    ) -> ConnectorInstance:
        """Get an instance whose configuration has secrets hydrated."""
        ...


class OAuthParameterRepositoryProtocol(Protocol):
    """Read/write access to OAuth parameters keyed by definition."""

    async def get_by_definition_id(
        self,
        actor_type: ActorType,
        definition_id: UUID,
        *,
        workspace_id: Optional[UUID] = None,
    ) -> Optional[OAuthParameter]:
        """Get the parameter for a definition; workspace_id=None means instance-wide."""
        ...

    async def write(self, param: OAuthParameter) -> OAuthParameter:
        """Insert or replace a parameter by its oauth_parameter_id."""
        ...


class ActorDefinitionVersionResolverProtocol(Protocol):
    """Decides which definition version applies to an actor or a workspace."""

    async def get_version_for_actor(
        self, definition: ConnectorDefinition, actor_id: UUID
    ) -> ActorDefinitionVersion:
        """Version used by an existing source/destination."""
        ...

    async def get_version_for_workspace(
        self, definition: ConnectorDefinition, workspace_id: UUID
    ) -> ActorDefinitionVersion:
        """Version a new source/destination in the workspace would use."""
        ...
