"""Resolves which connector version applies to an actor or a workspace."""

from typing import Optional
from uuid import UUID

from conduit.core.logging import logger
from conduit.domains.connectors.protocols import (
    ActorDefinitionVersionRepositoryProtocol,
    ConnectorInstanceRepositoryProtocol,
)
from conduit.schemas.connector import ActorDefinitionVersion, ConnectorDefinition

resolver_logger = logger.with_prefix("VersionResolver: ").with_context(
    component="actor_definition_version_resolver"
)


class ActorDefinitionVersionResolver:
    """Picks a definition version, honouring actor and workspace pins.

    Precedence for an existing actor: actor pin, then the pin of the
    actor's workspace, then the definition's default version. For a
    workspace: workspace pin, then default.
    """

    def __init__(
        self,
        *,
        version_repo: ActorDefinitionVersionRepositoryProtocol,
        instance_repo: ConnectorInstanceRepositoryProtocol,
    ) -> None:
        """Store repositories used for pin and instance lookups."""
        self._version_repo = version_repo
        self._instance_repo = instance_repo

    async def get_version_for_actor(
        self, definition: ConnectorDefinition, actor_id: UUID
    ) -> ActorDefinitionVersion:
        """Version used by an existing source/destination."""
        instance = await self._instance_repo.get_instance(definition.actor_type, actor_id)
        pinned = await self._version_repo.get_pinned_version_id(definition.id, actor_id=actor_id)
        if pinned is None:
            pinned = await self._version_repo.get_pinned_version_id(
                definition.id, workspace_id=instance.workspace_id
            )
        return await self._load(definition, pinned)

    async def get_version_for_workspace(
        self, definition: ConnectorDefinition, workspace_id: UUID
    ) -> ActorDefinitionVersion:
        """Version a new source/destination in the workspace would use."""
        pinned = await self._version_repo.get_pinned_version_id(
            definition.id, workspace_id=workspace_id
        )
        return await self._load(definition, pinned)

    async def _load(
        self, definition: ConnectorDefinition, pinned: Optional[UUID]
    ) -> ActorDefinitionVersion:
        if pinned is not None:
            resolver_logger.debug(f"Using pinned version {pinned} for definition {definition.id}")
            return await self._version_repo.get_version(pinned)
        return await self._version_repo.get_version(definition.default_version_id)
