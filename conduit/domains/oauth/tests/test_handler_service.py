"""Unit tests for OAuthHandlerService.

Covers:
- consent: source/destination, with and without OAuth config spec
- reconciliation of masked input against an existing actor
- version selection: actor pin, workspace pin, default
- completion: normalization, deprecated no-spec path, failure passthrough
- return-secret path
- instance-wide params: create and update
- analytics: events recorded, failures swallowed
- not-found and unsupported provider errors
"""

from uuid import uuid4

import pytest

from conduit.adapters.analytics.fake import FakeAnalyticsTracker
from conduit.adapters.secrets.fake import FakeSecretStore
from conduit.core.constants.secrets import SECRETS_MASK
from conduit.domains.connectors.exceptions import (
    ConnectorDefinitionNotFoundError,
    ConnectorInstanceNotFoundError,
)
from conduit.domains.connectors.fakes.repository import (
    FakeActorDefinitionVersionRepository,
    FakeConnectorDefinitionRepository,
    FakeConnectorInstanceRepository,
    FakeOAuthParameterRepository,
)
from conduit.domains.connectors.version_resolver import ActorDefinitionVersionResolver
from conduit.domains.oauth.exceptions import OAuthProviderNotSupportedError
from conduit.domains.oauth.fakes.flow import FakeOAuthFlow
from conduit.domains.oauth.handler_service import OAuthHandlerService
from conduit.domains.oauth.registry import OAuthFlowRegistry
from conduit.domains.oauth.secret_writer import OAuthResponseSecretWriter
from conduit.domains.oauth.tracking import CONSENT_URL_REQUESTED, OAUTH_FLOW_COMPLETED
from conduit.schemas.connector import (
    ActorDefinitionVersion,
    ActorType,
    AdvancedAuth,
    ConnectorDefinition,
    ConnectorInstance,
    ConnectorSpecification,
    OAuthConfigSpecification,
    OAuthParameter,
)
from conduit.schemas.oauth import (
    CompleteOAuthRequest,
    CompleteOAuthResponse,
    InstancewideOAuthParamsRequest,
    OAuthConsentRequest,
)

WORKSPACE_ID = uuid4()
DEFINITION_ID = uuid4()
DEFAULT_VERSION_ID = uuid4()
PINNED_VERSION_ID = uuid4()
ACTOR_ID = uuid4()
REDIRECT_URL = "https://app.example.com/auth_flow"
SECRET_PREFIX = "conduit_oauth_workspace_"

OAUTH_SPEC = OAuthConfigSpecification(
    oauth_user_input_from_connector_config_specification={
        "type": "object",
        "properties": {
            "client_id": {
                "type": "string",
                "path_in_connector_config": ["credentials", "client_id"],
            },
            "client_secret": {
                "type": "string",
                "path_in_connector_config": ["credentials", "client_secret"],
            },
        },
    }
)
STORED_CONFIGURATION = {
    "credentials": {"client_id": "stored-id", "client_secret": "stored-secret"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _spec(with_oauth: bool = True) -> ConnectorSpecification:
    if not with_oauth:
        return ConnectorSpecification(connection_specification={"type": "object"})
    return ConnectorSpecification(
        advanced_auth=AdvancedAuth(
            predicate_key=["credentials", "auth_type"],
            predicate_value="oauth2.0",
            oauth_config_specification=OAUTH_SPEC,
        )
    )


def _definition(actor_type: ActorType = ActorType.SOURCE) -> ConnectorDefinition:
    return ConnectorDefinition(
        id=DEFINITION_ID,
        name="GitHub",
        actor_type=actor_type,
        default_version_id=DEFAULT_VERSION_ID,
    )


def _version(
    version_id=DEFAULT_VERSION_ID,
    repository: str = "conduit/source-github",
    tag: str = "1.0.0",
    with_oauth: bool = True,
) -> ActorDefinitionVersion:
    return ActorDefinitionVersion(
        id=version_id,
        definition_id=DEFINITION_ID,
        docker_repository=repository,
        docker_image_tag=tag,
        spec=_spec(with_oauth),
    )


def _instance(actor_type: ActorType = ActorType.SOURCE) -> ConnectorInstance:
    return ConnectorInstance(
        id=ACTOR_ID,
        definition_id=DEFINITION_ID,
        workspace_id=WORKSPACE_ID,
        actor_type=actor_type,
        configuration={"credentials": {"client_id": "stored-id", "client_secret": SECRETS_MASK}},
    )


def _consent_request(**overrides) -> OAuthConsentRequest:
    fields = dict(
        definition_id=DEFINITION_ID,
        workspace_id=WORKSPACE_ID,
        redirect_url=REDIRECT_URL,
    )
    fields.update(overrides)
    return OAuthConsentRequest(**fields)


def _complete_request(**overrides) -> CompleteOAuthRequest:
    fields = dict(
        definition_id=DEFINITION_ID,
        workspace_id=WORKSPACE_ID,
        redirect_url=REDIRECT_URL,
        query_params={"code": "auth-code"},
    )
    fields.update(overrides)
    return CompleteOAuthRequest(**fields)


class _Harness:
    """Service wired with fakes; attributes expose each fake for assertions."""

    def __init__(
        self,
        *,
        actor_type: ActorType = ActorType.SOURCE,
        versions=None,
        flows=None,
    ) -> None:
        self.definitions = FakeConnectorDefinitionRepository()
        self.definitions.seed(_definition(actor_type))
        self.versions = FakeActorDefinitionVersionRepository()
        self.versions.seed(*(versions or [_version()]))
        self.instances = FakeConnectorInstanceRepository()
        self.instances.seed(_instance(actor_type))
        self.instances.seed_hydrated(actor_type, ACTOR_ID, STORED_CONFIGURATION)
        self.oauth_params = FakeOAuthParameterRepository()
        self.analytics = FakeAnalyticsTracker()
        self.secret_store = FakeSecretStore()
        self.flow = FakeOAuthFlow()

        registry = OAuthFlowRegistry()
        registry.build(flows if flows is not None else {"conduit/source-github": self.flow})

        self.service = OAuthHandlerService(
            definition_repo=self.definitions,
            version_resolver=ActorDefinitionVersionResolver(
                version_repo=self.versions, instance_repo=self.instances
            ),
            instance_repo=self.instances,
            oauth_param_repo=self.oauth_params,
            flow_registry=registry,
            analytics=self.analytics,
            secret_writer=OAuthResponseSecretWriter(
                secret_store=self.secret_store, prefix=SECRET_PREFIX
            ),
        )


# ---------------------------------------------------------------------------
# Consent
# ---------------------------------------------------------------------------


class TestConsent:
    async def test_source_consent_for_new_actor_passes_input_through(self):
        h = _Harness()
        h.flow.seed_consent_url("https://github.com/login/oauth/authorize?state=x")

        result = await h.service.get_source_oauth_consent(
            _consent_request(oauth_input_configuration={"client_id": "typed-id"})
        )

        assert result.consent_url == "https://github.com/login/oauth/authorize?state=x"
        call = h.flow.last_call("get_source_consent_url")
        assert call["workspace_id"] == WORKSPACE_ID
        assert call["definition_id"] == DEFINITION_ID
        assert call["redirect_url"] == REDIRECT_URL
        assert call["input_configuration"] == {"client_id": "typed-id"}
        assert call["oauth_config_specification"] == OAUTH_SPEC

    async def test_consent_for_existing_actor_unmasks_secrets(self):
        h = _Harness()

        await h.service.get_source_oauth_consent(
            _consent_request(
                actor_id=ACTOR_ID,
                oauth_input_configuration={
                    "client_id": "new-id",
                    "client_secret": SECRETS_MASK,
                },
            )
        )

        call = h.flow.last_call("get_source_consent_url")
        assert call["input_configuration"] == {
            "client_id": "new-id",
            "client_secret": "stored-secret",
        }
        assert ("get_instance_with_secrets", ActorType.SOURCE, ACTOR_ID) in h.instances._calls

    async def test_consent_without_oauth_spec_sends_empty_input(self):
        h = _Harness(versions=[_version(with_oauth=False)])

        await h.service.get_source_oauth_consent(
            _consent_request(oauth_input_configuration={"client_id": "ignored"})
        )

        call = h.flow.last_call("get_source_consent_url")
        assert call["input_configuration"] == {}
        assert call["oauth_config_specification"] is None

    async def test_destination_consent_uses_destination_flow(self):
        flow = FakeOAuthFlow()
        h = _Harness(
            actor_type=ActorType.DESTINATION,
            versions=[_version(repository="conduit/destination-gcs")],
            flows={"conduit/destination-gcs": flow},
        )

        await h.service.get_destination_oauth_consent(_consent_request())

        assert [name for name, _ in flow.calls] == ["get_destination_consent_url"]

    async def test_consent_tracks_event(self):
        h = _Harness()

        await h.service.get_source_oauth_consent(_consent_request())

        event = h.analytics.get(CONSENT_URL_REQUESTED)
        assert event.distinct_id == str(WORKSPACE_ID)
        assert event.groups == {"workspace": str(WORKSPACE_ID)}
        assert event.properties == {
            "connector_source": "GitHub",
            "connector_source_definition_id": str(DEFINITION_ID),
            "connector_source_docker_repository": "conduit/source-github",
            "connector_source_version": "1.0.0",
        }

    async def test_analytics_failure_does_not_fail_consent(self):
        h = _Harness()
        h.analytics.seed_error(RuntimeError("posthog down"))

        result = await h.service.get_source_oauth_consent(_consent_request())

        assert result.consent_url == "https://provider.example.com/consent"

    async def test_provider_error_propagates(self):
        h = _Harness()
        h.flow.seed_error(ConnectionError("provider unreachable"))

        with pytest.raises(ConnectionError):
            await h.service.get_source_oauth_consent(_consent_request())

        assert not h.analytics.has(CONSENT_URL_REQUESTED)


# ---------------------------------------------------------------------------
# Version selection
# ---------------------------------------------------------------------------


class TestVersionSelection:
    async def test_actor_pin_selects_pinned_flow(self):
        pinned_flow = FakeOAuthFlow()
        h = _Harness(
            versions=[
                _version(),
                _version(PINNED_VERSION_ID, repository="conduit/source-github-legacy", tag="0.9"),
            ],
        )
        h.versions.seed_actor_pin(DEFINITION_ID, ACTOR_ID, PINNED_VERSION_ID)
        h.service._flow_registry.register("conduit/source-github-legacy", pinned_flow)

        await h.service.get_source_oauth_consent(_consent_request(actor_id=ACTOR_ID))

        assert pinned_flow.calls
        assert not h.flow.calls

    async def test_workspace_pin_applies_without_actor(self):
        h = _Harness(versions=[_version(), _version(PINNED_VERSION_ID, tag="2.0.0")])
        h.versions.seed_workspace_pin(DEFINITION_ID, WORKSPACE_ID, PINNED_VERSION_ID)

        await h.service.get_source_oauth_consent(_consent_request())

        event = h.analytics.get(CONSENT_URL_REQUESTED)
        assert event.properties["connector_source_version"] == "2.0.0"

    async def test_unknown_actor_raises_not_found(self):
        h = _Harness()

        with pytest.raises(ConnectorInstanceNotFoundError):
            await h.service.get_source_oauth_consent(_consent_request(actor_id=uuid4()))


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


class TestComplete:
    async def test_source_completion_normalizes_result(self):
        h = _Harness()
        h.flow.seed_completion_result({"access_token": "tok", "refresh_token": "ref"})

        response = await h.service.complete_source_oauth(_complete_request())

        assert response == CompleteOAuthResponse(
            request_succeeded=True,
            request_error=None,
            auth_payload={"access_token": "tok", "refresh_token": "ref"},
        )
        call = h.flow.last_call("complete_source_oauth")
        assert call["query_params"] == {"code": "auth-code"}
        assert call["oauth_config_specification"] == OAUTH_SPEC
        assert h.analytics.has(OAUTH_FLOW_COMPLETED)

    async def test_completion_for_existing_actor_unmasks_secrets(self):
        h = _Harness()

        await h.service.complete_source_oauth(
            _complete_request(
                actor_id=ACTOR_ID,
                oauth_input_configuration={"client_secret": SECRETS_MASK},
            )
        )

        call = h.flow.last_call("complete_source_oauth")
        assert call["input_configuration"] == {"client_secret": "stored-secret"}

    async def test_completion_without_oauth_spec_uses_deprecated_call(self):
        h = _Harness(versions=[_version(with_oauth=False)])

        await h.service.complete_source_oauth(_complete_request())

        call = h.flow.last_call("complete_source_oauth")
        assert call["input_configuration"] is None
        assert call["oauth_config_specification"] is None

    async def test_provider_reported_failure_is_returned(self):
        h = _Harness()
        h.flow.seed_completion_result(
            {"request_succeeded": "false", "request_error": "access_denied"}
        )

        response = await h.service.complete_source_oauth(_complete_request())

        assert response.request_succeeded is False
        assert response.request_error == "access_denied"
        assert response.auth_payload == {}

    async def test_destination_completion(self):
        flow = FakeOAuthFlow()
        h = _Harness(
            actor_type=ActorType.DESTINATION,
            versions=[_version(repository="conduit/destination-gcs")],
            flows={"conduit/destination-gcs": flow},
        )

        response = await h.service.complete_destination_oauth(_complete_request())

        assert response.auth_payload == {"access_token": "fake_access_token"}
        assert [name for name, _ in flow.calls] == ["complete_destination_oauth"]
        event = h.analytics.get(OAUTH_FLOW_COMPLETED)
        assert "connector_destination_definition_id" in event.properties

    async def test_analytics_failure_does_not_fail_completion(self):
        h = _Harness()
        h.analytics.seed_error(RuntimeError("posthog down"))

        response = await h.service.complete_source_oauth(_complete_request())

        assert response.request_succeeded is True


# ---------------------------------------------------------------------------
# Return secret coordinate
# ---------------------------------------------------------------------------


class TestReturnSecret:
    async def test_returns_tokens_when_flag_unset(self):
        h = _Harness()

        response = await h.service.complete_source_oauth_handle_return_secret(_complete_request())

        assert response.auth_payload == {"access_token": "fake_access_token"}
        assert h.secret_store.writes == []

    async def test_returns_coordinate_when_flag_set(self):
        h = _Harness()

        response = await h.service.complete_source_oauth_handle_return_secret(
            _complete_request(return_secret_coordinate=True)
        )

        assert len(h.secret_store.writes) == 1
        coordinate, payload = h.secret_store.writes[0]
        assert response.auth_payload == {"secretId": coordinate.full_coordinate}
        assert coordinate.full_coordinate.startswith(f"{SECRET_PREFIX}{WORKSPACE_ID}_secret_")
        assert coordinate.full_coordinate.endswith("_v1")
        assert "fake_access_token" in payload

    async def test_write_oauth_response_secret(self):
        h = _Harness()
        payload = CompleteOAuthResponse(auth_payload={"token": "t"})

        response = await h.service.write_oauth_response_secret(WORKSPACE_ID, payload)

        stored = await h.secret_store.read_secret(h.secret_store.writes[0][0])
        assert CompleteOAuthResponse.model_validate_json(stored) == payload
        assert set(response.auth_payload) == {"secretId"}


# ---------------------------------------------------------------------------
# Instance-wide OAuth params
# ---------------------------------------------------------------------------


class TestInstancewideParams:
    async def test_creates_param_when_absent(self):
        h = _Harness()

        await h.service.set_source_instancewide_oauth_params(
            InstancewideOAuthParamsRequest(
                definition_id=DEFINITION_ID, params={"client_id": "id", "client_secret": "s"}
            )
        )

        [param] = h.oauth_params.all()
        assert param.actor_type == ActorType.SOURCE
        assert param.definition_id == DEFINITION_ID
        assert param.workspace_id is None
        assert param.configuration == {"client_id": "id", "client_secret": "s"}

    async def test_updates_existing_param_in_place(self):
        h = _Harness()
        existing = OAuthParameter(
            oauth_parameter_id=uuid4(),
            definition_id=DEFINITION_ID,
            actor_type=ActorType.DESTINATION,
            configuration={"client_id": "old"},
        )
        h.oauth_params.seed(existing)

        await h.service.set_destination_instancewide_oauth_params(
            InstancewideOAuthParamsRequest(definition_id=DEFINITION_ID, params={"client_id": "new"})
        )

        [param] = h.oauth_params.all()
        assert param.oauth_parameter_id == existing.oauth_parameter_id
        assert param.configuration == {"client_id": "new"}

    async def test_workspace_scoped_param_is_not_overwritten(self):
        h = _Harness()
        workspace_param = OAuthParameter(
            oauth_parameter_id=uuid4(),
            definition_id=DEFINITION_ID,
            actor_type=ActorType.SOURCE,
            workspace_id=WORKSPACE_ID,
            configuration={"client_id": "ws"},
        )
        h.oauth_params.seed(workspace_param)

        await h.service.set_source_instancewide_oauth_params(
            InstancewideOAuthParamsRequest(definition_id=DEFINITION_ID, params={"client_id": "all"})
        )

        params = {p.workspace_id: p.configuration for p in h.oauth_params.all()}
        assert params == {WORKSPACE_ID: {"client_id": "ws"}, None: {"client_id": "all"}}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    async def test_unknown_definition(self):
        h = _Harness()

        with pytest.raises(ConnectorDefinitionNotFoundError):
            await h.service.get_source_oauth_consent(_consent_request(definition_id=uuid4()))

    async def test_definition_lookup_is_scoped_by_actor_type(self):
        h = _Harness()

        with pytest.raises(ConnectorDefinitionNotFoundError):
            await h.service.get_destination_oauth_consent(_consent_request())

    async def test_unsupported_provider(self):
        h = _Harness(flows={})

        with pytest.raises(OAuthProviderNotSupportedError):
            await h.service.complete_source_oauth(_complete_request())

        assert not h.analytics.events
