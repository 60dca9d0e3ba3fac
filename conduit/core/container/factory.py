"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container with environment-appropriate implementations.

Design principles:
- Single place for all wiring decisions
- Fail fast: broken wiring crashes at startup, not at 3am
- Testable: can unit test factory logic with mock settings
"""

from typing import Mapping, Optional

from conduit.adapters.analytics.posthog import PostHogTracker
from conduit.adapters.secrets.fernet import FernetSecretStore
from conduit.core.config import Settings
from conduit.core.container.container import Container
from conduit.core.logging import logger
from conduit.domains.connectors.in_memory import InMemoryConnectorCatalog
from conduit.domains.connectors.version_resolver import ActorDefinitionVersionResolver
from conduit.domains.oauth.handler_service import OAuthHandlerService
from conduit.domains.oauth.protocols import OAuthFlowImplementation
from conduit.domains.oauth.registry import OAuthFlowRegistry
from conduit.domains.oauth.secret_writer import OAuthResponseSecretWriter


def create_container(
    settings: Settings,
    oauth_flows: Optional[Mapping[str, OAuthFlowImplementation]] = None,
    catalog: Optional[InMemoryConnectorCatalog] = None,
) -> Container:
    """Build container with environment-appropriate implementations.

    This is the single source of truth for dependency wiring.

    Args:
        settings: Application settings (from core/config)
        oauth_flows: Provider flows keyed by connector docker repository
        catalog: Pre-populated connector catalog; an empty one is created if omitted

    Returns:
        Fully constructed Container ready for use
    """
    # -----------------------------------------------------------------
    # Analytics (PostHog, disabled locally)
    # -----------------------------------------------------------------
    analytics = PostHogTracker(settings)

    # -----------------------------------------------------------------
    # Secret store
    # -----------------------------------------------------------------
    secret_store = FernetSecretStore(settings.ENCRYPTION_KEY)

    # -----------------------------------------------------------------
    # Connector catalog
    # The in-memory catalog implements every repository protocol.
    # -----------------------------------------------------------------
    catalog = catalog if catalog is not None else InMemoryConnectorCatalog()
    version_resolver = ActorDefinitionVersionResolver(version_repo=catalog, instance_repo=catalog)

    # -----------------------------------------------------------------
    # OAuth
    # -----------------------------------------------------------------
    oauth_flow_registry = OAuthFlowRegistry()
    oauth_flow_registry.build(oauth_flows or {})

    oauth_handler = OAuthHandlerService(
        definition_repo=catalog,
        version_resolver=version_resolver,
        instance_repo=catalog,
        oauth_param_repo=catalog,
        flow_registry=oauth_flow_registry,
        analytics=analytics,
        secret_writer=OAuthResponseSecretWriter(
            secret_store=secret_store,
            prefix=settings.OAUTH_SECRET_PREFIX,
        ),
    )

    logger.with_context(component="container").info(
        f"Container built (env={settings.ENVIRONMENT.value})"
    )

    return Container(
        analytics=analytics,
        secret_store=secret_store,
        definition_repo=catalog,
        version_repo=catalog,
        instance_repo=catalog,
        oauth_param_repo=catalog,
        version_resolver=version_resolver,
        oauth_flow_registry=oauth_flow_registry,
        oauth_handler=oauth_handler,
    )
