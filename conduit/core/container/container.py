"""Dependency Injection Container.

The container is a simple immutable dataclass that holds protocol implementations.
It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Fail fast: all construction at startup
- Type safety: fields are protocol types
- Testing: construct directly with fakes
"""

from dataclasses import dataclass, replace
from typing import Any

from conduit.adapters.analytics.protocols import AnalyticsTrackerProtocol
from conduit.core.protocols import SecretStore
from conduit.domains.connectors.protocols import (
    ActorDefinitionVersionRepositoryProtocol,
    ActorDefinitionVersionResolverProtocol,
    ConnectorDefinitionRepositoryProtocol,
    ConnectorInstanceRepositoryProtocol,
    OAuthParameterRepositoryProtocol,
)
from conduit.domains.oauth.protocols import OAuthFlowRegistryProtocol, OAuthHandlerServiceProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # Production: use the global container built by factory
        from conduit.core.container import container
        consent = await container.oauth_handler.get_source_oauth_consent(request)

        # Testing: construct directly with fakes
        test_container = Container(analytics=FakeAnalyticsTracker(), ...)
    """

    # Analytics sink (fire-and-forget)
    analytics: AnalyticsTrackerProtocol

    # Secret storage for materialized OAuth responses
    secret_store: SecretStore

    # Connector catalog
    definition_repo: ConnectorDefinitionRepositoryProtocol
    version_repo: ActorDefinitionVersionRepositoryProtocol
    instance_repo: ConnectorInstanceRepositoryProtocol
    oauth_param_repo: OAuthParameterRepositoryProtocol
    version_resolver: ActorDefinitionVersionResolverProtocol

    # OAuth
    oauth_flow_registry: OAuthFlowRegistryProtocol
    oauth_handler: OAuthHandlerServiceProtocol

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

        Useful for partial overrides in tests:

            modified = container.replace(analytics=FakeAnalyticsTracker())

        Args:
            **changes: Dependency name -> new implementation

        Returns:
            New Container with specified dependencies replaced
        """
        return replace(self, **changes)
