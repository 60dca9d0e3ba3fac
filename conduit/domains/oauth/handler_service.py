"""OAuth handler service: consent URLs and token exchange for connectors.

Resolves the connector definition, the version that applies to the caller
and the OAuth flow registered for that version's image, reconciles the
caller's (possibly masked) input with the stored configuration, and hands
off to the flow. Does NOT speak any OAuth wire protocol itself.
"""

from typing import Any, Dict, Tuple
from uuid import UUID, uuid4

from conduit.adapters.analytics.protocols import AnalyticsTrackerProtocol
from conduit.core.logging import ContextualLogger, logger
from conduit.domains.connectors.protocols import (
    ActorDefinitionVersionResolverProtocol,
    ConnectorDefinitionRepositoryProtocol,
    ConnectorInstanceRepositoryProtocol,
    OAuthParameterRepositoryProtocol,
)
from conduit.domains.oauth.protocols import OAuthFlowImplementation, OAuthFlowRegistryProtocol
from conduit.domains.oauth.reconciler import get_oauth_input_configuration_for_consent
from conduit.domains.oauth.response import map_to_complete_oauth_response
from conduit.domains.oauth.secret_writer import OAuthResponseSecretWriter
from conduit.domains.oauth.tracking import (
    CONSENT_URL_REQUESTED,
    OAUTH_FLOW_COMPLETED,
    generate_definition_metadata,
)
from conduit.schemas.connector import (
    ActorDefinitionVersion,
    ActorType,
    ConnectorDefinition,
    ConnectorSpecification,
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

oauth_logger = logger.with_prefix("OAuth: ").with_context(component="oauth_handler")


class OAuthHandlerService:
    """Orchestrates OAuth consent and completion for sources and destinations.

    Responsibilities:
    - Pick the connector version and the OAuth flow for its image
    - Unmask caller input against the stored configuration of an existing actor
    - Normalize provider results and optionally store them as a secret
    - Maintain instance-wide OAuth parameters per definition
    - Report usage to analytics without ever failing the call because of it
    """

    def __init__(
        self,
        *,
        definition_repo: ConnectorDefinitionRepositoryProtocol,
        version_resolver: ActorDefinitionVersionResolverProtocol,
        instance_repo: ConnectorInstanceRepositoryProtocol,
        oauth_param_repo: OAuthParameterRepositoryProtocol,
        flow_registry: OAuthFlowRegistryProtocol,
        analytics: AnalyticsTrackerProtocol,
        secret_writer: OAuthResponseSecretWriter,
    ) -> None:
        """Store dependencies for OAuth consent/completion orchestration."""
        self._definition_repo = definition_repo
        self._version_resolver = version_resolver
        self._instance_repo = instance_repo
        self._oauth_param_repo = oauth_param_repo
        self._flow_registry = flow_registry
        self._analytics = analytics
        self._secret_writer = secret_writer

    # ------------------------------------------------------------------
    # Consent
    # ------------------------------------------------------------------

    async def get_source_oauth_consent(self, request: OAuthConsentRequest) -> OAuthConsentRead:
        """Consent URL for a source."""
        return await self._get_oauth_consent(ActorType.SOURCE, request)

    async def get_destination_oauth_consent(
        self, request: OAuthConsentRequest
    ) -> OAuthConsentRead:
        """Consent URL for a destination."""
        return await self._get_oauth_consent(ActorType.DESTINATION, request)

    async def _get_oauth_consent(
        self, actor_type: ActorType, request: OAuthConsentRequest
    ) -> OAuthConsentRead:
        log = self._request_logger(actor_type, request)
        definition, version, flow = await self._resolve_flow(actor_type, request)
        spec = version.spec
        get_consent_url = (
            flow.get_source_consent_url
            if actor_type == ActorType.SOURCE
            else flow.get_destination_consent_url
        )

        if has_oauth_config_specification(spec):
            input_configuration = await self._input_configuration(actor_type, spec, request, log)
            consent_url = await get_consent_url(
                request.workspace_id,
                request.definition_id,
                request.redirect_url,
                input_configuration,
                spec.advanced_auth.oauth_config_specification,
            )
        else:
            consent_url = await get_consent_url(
                request.workspace_id,
                request.definition_id,
                request.redirect_url,
                {},
                None,
            )

        self._track(CONSENT_URL_REQUESTED, request.workspace_id, definition, version, log)
        log.debug(f"Generated consent URL via {version.docker_repository}")
        return OAuthConsentRead(consent_url=consent_url)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    async def complete_source_oauth(self, request: CompleteOAuthRequest) -> CompleteOAuthResponse:
        """Complete a source OAuth flow and normalize the provider result."""
        return await self._complete_oauth(ActorType.SOURCE, request)

    async def complete_destination_oauth(
        self, request: CompleteOAuthRequest
    ) -> CompleteOAuthResponse:
        """Complete a destination OAuth flow and normalize the provider result."""
        return await self._complete_oauth(ActorType.DESTINATION, request)

    async def complete_source_oauth_handle_return_secret(
        self, request: CompleteOAuthRequest
    ) -> CompleteOAuthResponse:
        """Complete a source OAuth flow.

        When ``request.return_secret_coordinate`` is set, the tokens are stored
        as a secret and only the coordinate is returned.
        """
        oauth_tokens = await self.complete_source_oauth(request)
        if request.return_secret_coordinate:
            return await self.write_oauth_response_secret(request.workspace_id, oauth_tokens)
        return oauth_tokens

    async def _complete_oauth(
        self, actor_type: ActorType, request: CompleteOAuthRequest
    ) -> CompleteOAuthResponse:
        log = self._request_logger(actor_type, request)
        definition, version, flow = await self._resolve_flow(actor_type, request)
        spec = version.spec
        complete = (
            flow.complete_source_oauth
            if actor_type == ActorType.SOURCE
            else flow.complete_destination_oauth
        )

        if has_oauth_config_specification(spec):
            input_configuration = await self._input_configuration(actor_type, spec, request, log)
            result = await complete(
                request.workspace_id,
                request.definition_id,
                request.query_params,
                request.redirect_url,
                input_configuration,
                spec.advanced_auth.oauth_config_specification,
            )
        else:
            # Deprecated path, kept for connectors that don't declare an OAuth spec yet
            result = await complete(
                request.workspace_id,
                request.definition_id,
                request.query_params,
                request.redirect_url,
            )

        self._track(OAUTH_FLOW_COMPLETED, request.workspace_id, definition, version, log)
        response = map_to_complete_oauth_response(result)
        if not response.request_succeeded:
            log.warning(f"OAuth exchange reported failure: {response.request_error}")
        return response

    # ------------------------------------------------------------------
    # Secrets
    # ------------------------------------------------------------------

    async def write_oauth_response_secret(
        self, workspace_id: UUID, payload: CompleteOAuthResponse
    ) -> CompleteOAuthResponse:
        """Store ``payload`` as a secret and return a response holding its coordinate."""
        return await self._secret_writer.write(workspace_id, payload)

    # ------------------------------------------------------------------
    # Instance-wide parameters
    # ------------------------------------------------------------------

    async def set_source_instancewide_oauth_params(
        self, request: InstancewideOAuthParamsRequest
    ) -> None:
        """Store instance-wide OAuth parameters for a source definition."""
        await self._set_instancewide_oauth_params(ActorType.SOURCE, request)

    async def set_destination_instancewide_oauth_params(
        self, request: InstancewideOAuthParamsRequest
    ) -> None:
        """Store instance-wide OAuth parameters for a destination definition."""
        await self._set_instancewide_oauth_params(ActorType.DESTINATION, request)

    async def _set_instancewide_oauth_params(
        self, actor_type: ActorType, request: InstancewideOAuthParamsRequest
    ) -> None:
        existing = await self._oauth_param_repo.get_by_definition_id(
            actor_type, request.definition_id, workspace_id=None
        )
        param = existing or OAuthParameter(
            oauth_parameter_id=uuid4(),
            definition_id=request.definition_id,
            actor_type=actor_type,
        )
        # TODO: validate params against the definition's complete_oauth_server_input_specification
        param = param.model_copy(
            update={"configuration": dict(request.params), "definition_id": request.definition_id}
        )
        await self._oauth_param_repo.write(param)
        oauth_logger.with_context(
            definition_id=str(request.definition_id), actor_type=actor_type.value
        ).info(f"Stored instance-wide OAuth parameters {param.oauth_parameter_id}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _resolve_flow(
        self, actor_type: ActorType, request: OAuthConsentRequest
    ) -> Tuple[ConnectorDefinition, ActorDefinitionVersion, OAuthFlowImplementation]:
        definition = await self._definition_repo.get_definition(actor_type, request.definition_id)
        if request.actor_id is not None:
            version = await self._version_resolver.get_version_for_actor(
                definition, request.actor_id
            )
        else:
            version = await self._version_resolver.get_version_for_workspace(
                definition, request.workspace_id
            )
        return definition, version, self._flow_registry.get(version.docker_repository)

    async def _input_configuration(
        self,
        actor_type: ActorType,
        spec: ConnectorSpecification,
        request: OAuthConsentRequest,
        log: ContextualLogger,
    ) -> Dict[str, Any]:
        if request.actor_id is None:
            return dict(request.oauth_input_configuration or {})

        hydrated = await self._instance_repo.get_instance_with_secrets(actor_type, request.actor_id)
        return get_oauth_input_configuration_for_consent(
            spec, hydrated.configuration, request.oauth_input_configuration, log
        )

    def _track(
        self,
        event_name: str,
        workspace_id: UUID,
        definition: ConnectorDefinition,
        version: ActorDefinitionVersion,
        log: ContextualLogger,
    ) -> None:
        metadata = generate_definition_metadata(definition, version)
        try:
            self._analytics.track(
                event_name,
                str(workspace_id),
                properties=metadata,
                groups={"workspace": str(workspace_id)},
            )
        except Exception as e:
            log.error(f"Failed while reporting usage: {e}")

    @staticmethod
    def _request_logger(actor_type: ActorType, request: OAuthConsentRequest) -> ContextualLogger:
        return oauth_logger.with_context(
            workspace_id=str(request.workspace_id),
            definition_id=str(request.definition_id),
            actor_type=actor_type.value,
        )
