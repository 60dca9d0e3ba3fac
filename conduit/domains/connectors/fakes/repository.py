"""Fake connector catalog repositories for testing."""

from typing import Dict, List, Optional, Tuple
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


class FakeConnectorDefinitionRepository:
    """In-memory fake for ConnectorDefinitionRepositoryProtocol."""

    def __init__(self) -> None:
        self._store: Dict[Tuple[ActorType, UUID], ConnectorDefinition] = {}
        self._calls: List[Tuple[str, ...]] = []

    def seed(self, *definitions: ConnectorDefinition) -> None:
        for definition in definitions:
            self._store[(definition.actor_type, definition.id)] = definition

    async def get_definition(
        self, actor_type: ActorType, definition_id: UUID
    ) -> ConnectorDefinition:
        self._calls.append(("get_definition", actor_type, definition_id))
        definition = self._store.get((actor_type, definition_id))
        if definition is None:
            raise ConnectorDefinitionNotFoundError(actor_type, definition_id)
        return definition


class FakeActorDefinitionVersionRepository:
    """In-memory fake for ActorDefinitionVersionRepositoryProtocol."""

    def __init__(self) -> None:
        self._store: Dict[UUID, ActorDefinitionVersion] = {}
        self._actor_pins: Dict[Tuple[UUID, UUID], UUID] = {}
        self._workspace_pins: Dict[Tuple[UUID, UUID], UUID] = {}
        self._calls: List[Tuple[str, ...]] = []

    def seed(self, *versions: ActorDefinitionVersion) -> None:
        for version in versions:
            self._store[version.id] = version

    def seed_actor_pin(self, definition_id: UUID, actor_id: UUID, version_id: UUID) -> None:
        self._actor_pins[(definition_id, actor_id)] = version_id

    def seed_workspace_pin(self, definition_id: UUID, workspace_id: UUID, version_id: UUID) -> None:
        self._workspace_pins[(definition_id, workspace_id)] = version_id

    async def get_version(self, version_id: UUID) -> ActorDefinitionVersion:
        self._calls.append(("get_version", version_id))
        version = self._store.get(version_id)
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
        self._calls.append(("get_pinned_version_id", definition_id, workspace_id, actor_id))
        if actor_id is not None:
            return self._actor_pins.get((definition_id, actor_id))
        if workspace_id is not None:
            return self._workspace_pins.get((definition_id, workspace_id))
        return None


class FakeConnectorInstanceRepository:
    """In-memory fake for ConnectorInstanceRepositoryProtocol.

    ``seed_hydrated`` overrides the configuration returned by
    ``get_instance_with_secrets`` for one instance.
    """

    def __init__(self) -> None:
        self._store: Dict[Tuple[ActorType, UUID], ConnectorInstance] = {}
        self._hydrated: Dict[Tuple[ActorType, UUID], dict] = {}
        self._calls: List[Tuple[str, ...]] = []

    def seed(self, *instances: ConnectorInstance) -> None:
        for instance in instances:
            self._store[(instance.actor_type, instance.id)] = instance

    def seed_hydrated(self, actor_type: ActorType, actor_id: UUID, configuration: dict) -> None:
        self._hydrated[(actor_type, actor_id)] = configuration

    async def get_instance(self, actor_type: ActorType, actor_id: UUID) -> ConnectorInstance:
        self._calls.append(("get_instance", actor_type, actor_id))
        instance = self._store.get((actor_type, actor_id))
        if instance is None:
            raise ConnectorInstanceNotFoundError(actor_type, actor_id)
        return instance

    async def get_instance_with_secrets(
        self, actor_type: ActorType, actor_id: UUID
    ) -> ConnectorInstance:
        self._calls.append(("get_instance_with_secrets", actor_type, actor_id))
        instance = self._store.get((actor_type, actor_id))
        if instance is None:
            raise ConnectorInstanceNotFoundError(actor_type, actor_id)
        hydrated = self._hydrated.get((actor_type, actor_id))
        if hydrated is None:
            return instance
        return instance.model_copy(update={"configuration": hydrated})


class FakeOAuthParameterRepository:
    """In-memory fake for OAuthParameterRepositoryProtocol. Records writes."""

    def __init__(self) -> None:
        self._store: Dict[UUID, OAuthParameter] = {}
        self.writes: List[OAuthParameter] = []

    def seed(self, *params: OAuthParameter) -> None:
        for param in params:
            self._store[param.oauth_parameter_id] = param

    async def get_by_definition_id(
        self,
        actor_type: ActorType,
        definition_id: UUID,
        *,
        workspace_id: Optional[UUID] = None,
    ) -> Optional[OAuthParameter]:
        for param in self._store.values():
            if (
                param.actor_type == actor_type
                and param.definition_id == definition_id
                and param.workspace_id == workspace_id
            ):
                return param
        return None

    async def write(self, param: OAuthParameter) -> OAuthParameter:
        self.writes.append(param)
        self._store[param.oauth_parameter_id] = param
        return param

    def all(self) -> List[OAuthParameter]:
        return list(self._store.values())
