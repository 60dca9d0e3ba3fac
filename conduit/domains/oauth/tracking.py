"""Analytics metadata for OAuth events."""

from typing import Any, Dict

from conduit.schemas.connector import ActorDefinitionVersion, ConnectorDefinition

CONSENT_URL_REQUESTED = "oauth_consent_url_requested"
OAUTH_FLOW_COMPLETED = "oauth_flow_completed"


def generate_definition_metadata(
    definition: ConnectorDefinition, version: ActorDefinitionVersion
) -> Dict[str, Any]:
    """Describe the connector involved in an OAuth event.

    Keys are namespaced by actor type, e.g. ``connector_source_definition_id``.
    """
    prefix = f"connector_{definition.actor_type.value}"
    return {
        prefix: definition.name,
        f"{prefix}_definition_id": str(definition.id),
        f"{prefix}_docker_repository": version.docker_repository,
        f"{prefix}_version": version.docker_image_tag,
    }
