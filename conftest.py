"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated test packages under conduit/, making its
fixtures available to every domain and adapter test.
"""

import os

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any conduit module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENCRYPTION_KEY", "SpgLrrEEgJ/7QdhSMSvagL1juEY5eoyCG0tZN7OSQV0=")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ANALYTICS_ENABLED", "false")


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_analytics():
    """Fake AnalyticsTracker that records tracked events."""
    from conduit.adapters.analytics.fake import FakeAnalyticsTracker

    return FakeAnalyticsTracker()


@pytest.fixture
def fake_secret_store():
    """Fake SecretStore that records writes in plain text."""
    from conduit.adapters.secrets.fake import FakeSecretStore

    return FakeSecretStore()


@pytest.fixture
def fake_oauth_flow():
    """Fake OAuthFlowImplementation with a canned consent URL and token result."""
    from conduit.domains.oauth.fakes.flow import FakeOAuthFlow

    return FakeOAuthFlow()


@pytest.fixture
def catalog():
    """Empty in-process connector catalog."""
    from conduit.domains.connectors.in_memory import InMemoryConnectorCatalog

    return InMemoryConnectorCatalog()


# ---------------------------------------------------------------------------
# Composite fixture: full Container with fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def test_container(fake_analytics, fake_secret_store, fake_oauth_flow, catalog):
    """A Container with external dependencies replaced by fakes.

    The catalog is the in-memory one; a single fake OAuth flow is registered
    under "conduit/source-test".

    For partial overrides, use container.replace():
        other = test_container.replace(analytics=PostHogTracker(settings))
    """
    from conduit.core.container import Container
    from conduit.domains.connectors.version_resolver import ActorDefinitionVersionResolver
    from conduit.domains.oauth.handler_service import OAuthHandlerService
    from conduit.domains.oauth.registry import OAuthFlowRegistry
    from conduit.domains.oauth.secret_writer import OAuthResponseSecretWriter

    registry = OAuthFlowRegistry()
    registry.build({"conduit/source-test": fake_oauth_flow})
    resolver = ActorDefinitionVersionResolver(version_repo=catalog, instance_repo=catalog)

    return Container(
        analytics=fake_analytics,
        secret_store=fake_secret_store,
        definition_repo=catalog,
        version_repo=catalog,
        instance_repo=catalog,
        oauth_param_repo=catalog,
        version_resolver=resolver,
        oauth_flow_registry=registry,
        oauth_handler=OAuthHandlerService(
            definition_repo=catalog,
            version_resolver=resolver,
            instance_repo=catalog,
            oauth_param_repo=catalog,
            flow_registry=registry,
            analytics=fake_analytics,
            secret_writer=OAuthResponseSecretWriter(
                secret_store=fake_secret_store, prefix="conduit_oauth_workspace_"
            ),
        ),
    )
