"""In-process connector catalog.

Implements every connector repository protocol over plain dicts. Used
for local wiring and as the default catalog in the container; a
database-backed catalog can replace it behind the same protocols.
"""

from typing import Dict, Optional, Tuple
from uuid import UUID

from conduit.domains.connectors.exceptions import (
    ActorDefinitionVersionNotFoundError,
    ConnectorDefinitionNotFoundError,
    ConnectorInstanceNotFoundError,
)
from conduit.schemas.connector import (
    ActorDefinitionVersion,
    ActorType,
    ConnectorDefinition,
    ConnectorInstance,
    OAuthParameter,
)


class InMemoryConnectorCatalog:
    """Dict-backed definitions, versions, instances and OAuth parameters.

    Instances are stored hydrated; ``get_instance`` and ``get_instance_with_secrets``
    therefore return the same configuration.
    """

    def __init__(self) -> None:
        """Initialize an empty catalog."""
        self._definitions: Dict[Tuple[ActorType, UUID], ConnectorDefinition] = {}
        self._versions: Dict[UUID, ActorDefinitionVersion] = {}
        self._instances: Dict[Tuple[ActorType, UUID], ConnectorInstance] = {}
        self._oauth_params: Dict[UUID, OAuthParameter] = {}
        self._actor_pins: Dict[Tuple[UUID, UUID], UUID] = {}
        self._workspace_pins: Dict[Tuple[UUID, UUID], UUID] = {}

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add_definition(self, definition: ConnectorDefinition) -> None:
        """Register a definition."""
        self._definitions[(definition.actor_type, definition.id)] = definition

    def add_version(self, version: ActorDefinitionVersion) -> None:
        """Register a definition version."""
        self._versions[version.id] = version

    def add_instance(self, instance: ConnectorInstance) -> None:
        """Register a configured source/destination."""
        self._instances[(instance.actor_type, instance.id)] = instance

    def pin_version(
        self,
        definition_id: UUID,
        version_id: UUID,
        *,
        workspace_id: Optional[UUID] = None,
        actor_id: Optional[UUID] = None,
    ) -> None:
        """Pin a version for exactly one of an actor or a workspace."""
        if (workspace_id is None) == (actor_id is None):
            raise ValueError("Pin a version for exactly one of workspace_id or actor_id")
        if actor_id is not None:
            self._actor_pins[(definition_id, actor_id)] = version_id
        else:
            self._workspace_pins[(definition_id, workspace_id)] = version_id

    # ------------------------------------------------------------------
    # ConnectorDefinitionRepositoryProtocol
    # ------------------------------------------------------------------

    async def get_definition(
        self, actor_type: ActorType, definition_id: UUID
    ) -> ConnectorDefinition:
        """Get a definition by actor type and id."""
        definition = self._definitions.get((actor_type, definition_id))
        if definition is None:
            raise ConnectorDefinitionNotFoundError(actor_type, definition_id)
        return definition

    # ------------------------------------------------------------------
    # ActorDefinitionVersionRepositoryProtocol
    # ------------------------------------------------------------------

    async def get_version(self, version_id: UUID) -> ActorDefinitionVersion:
        """Get a version by id."""
        version = self._versions.get(version_id)
        if version is None:
            raise ActorDefinitionVersionNotFoundError(version_id)
        return version

    async def get_pinned_version_id(
        self,
        definition_id: UUID,
        *,
        workspace_id: Optional[UUID] = None,
        actor_id: Optional[UUID] = None,
    ) -> Optional[UUID]:
        """Return the pinned version for the actor or workspace, if any."""
        if actor_id is not None:
            return self._actor_pins.get((definition_id, actor_id))
        if workspace_id is not None:
            return self._workspace_pins.get((definition_id, workspace_id))
        return None

    # ------------------------------------------------------------------
    # ConnectorInstanceRepositoryProtocol
    # ------------------------------------------------------------------

    async def get_instance(self, actor_type: ActorType, actor_id: UUID) -> ConnectorInstance:
        """Get a configured source/destination."""
        instance = self._instances.get((actor_type, actor_id))
        if instance is None:
            raise ConnectorInstanceNotFoundError(actor_type, actor_id)
        return instance.model_copy(deep=True)

    async def get_instance_with_secrets(
        self, actor_type: ActorType, actor_id: UUID
    ) -> ConnectorInstance:
        """Get a configured source/destination with hydrated secrets."""
        return await self.get_instance(actor_type, actor_id)

    # ------------------------------------------------------------------
    # OAuthParameterRepositoryProtocol
    # ------------------------------------------------------------------

    async def get_by_definition_id(
        self,
        actor_type: ActorType,
        definition_id: UUID,
        *,
        workspace_id: Optional[UUID] = None,
    ) -> Optional[OAuthParameter]:
        """Get the parameter for a definition and workspace scope."""
        for param in self._oauth_params.values():
            if (
                param.actor_type == actor_type
                and param.definition_id == definition_id
                and param.workspace_id == workspace_id
            ):
                return param.model_copy(deep=True)
        return None

    async def write(self, param: OAuthParameter) -> OAuthParameter:
        """Insert or replace a parameter."""
        self._oauth_params[param.oauth_parameter_id] = param.model_copy(deep=True)
        return param
