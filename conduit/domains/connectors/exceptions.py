"""Connector catalog exceptions."""

from uuid import UUID

from conduit.core.exceptions import NotFoundException
from conduit.schemas.connector import ActorType


class ConnectorDefinitionNotFoundError(NotFoundException):
    """Raised when no source/destination definition exists for the id."""

    def __init__(self, actor_type: ActorType, definition_id: UUID):
        self.actor_type = actor_type
        self.definition_id = definition_id
        super().__init__(f"{actor_type.value.capitalize()} definition not found: {definition_id}")


class ActorDefinitionVersionNotFoundError(NotFoundException):
    """Raised when a definition version id does not resolve."""

    def __init__(self, version_id: UUID):
        self.version_id = version_id
        super().__init__(f"Actor definition version not found: {version_id}")


class ConnectorInstanceNotFoundError(NotFoundException):
    """Raised when a configured source/destination does not exist."""

    def __init__(self, actor_type: ActorType, actor_id: UUID):
        self.actor_type = actor_type
        self.actor_id = actor_id
        super().__init__(f"{actor_type.value.capitalize()} not found: {actor_id}")
