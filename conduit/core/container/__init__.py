"""Dependency wiring for the OAuth handler.

``container.py`` declares what the application depends on; ``factory.py``
decides which implementation backs each dependency. This package keeps the
one process-wide instance.

Startup::

    from conduit.core.config import settings
    from conduit.core.container import initialize_container

    initialize_container(settings, oauth_flows={"conduit/source-github": GitHubFlow()})

Entry points then read ``conduit.core.container.container``. Domain code
never does: it gets its collaborators through constructor arguments, and
tests build a ``Container`` from fakes directly (see the root conftest).
"""

from typing import TYPE_CHECKING, Mapping, Optional

from conduit.core.container.container import Container
from conduit.core.container.factory import create_container

if TYPE_CHECKING:
    from conduit.core.config import Settings
    from conduit.domains.oauth.protocols import OAuthFlowImplementation

__all__ = ["Container", "create_container", "container", "initialize_container"]


container: Container | None = None
"""Process-wide container; None until ``initialize_container`` runs."""


def initialize_container(
    settings: "Settings",
    oauth_flows: Optional[Mapping[str, "OAuthFlowImplementation"]] = None,
) -> None:
    """Build the process-wide container.

    Args:
        settings: Application settings from core/config
        oauth_flows: Provider flows keyed by connector docker repository

    Raises:
        RuntimeError: If the container has already been built
    """
    global container

    if container is not None:
        raise RuntimeError("Container already initialized; call initialize_container() once.")

    container = create_container(settings, oauth_flows=oauth_flows)


def reset_container() -> None:
    """Drop the process-wide container. Tests only."""
    global container
    container = None
