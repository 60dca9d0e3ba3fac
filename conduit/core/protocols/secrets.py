"""Secret storage protocol.

Defines the structural typing contract for writing opaque secret strings
under a coordinate. Uses :class:`typing.Protocol` so implementations
don't need to inherit.

Usage::

    from conduit.core.protocols.secrets import SecretStore


    async def persist(store: SecretStore, coordinate: SecretCoordinate) -> str:
        stored = await store.store_secret(coordinate, '{"access_token": "tok"}')
        return stored.full_coordinate
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from conduit.core.shared_models import SecretCoordinate


@runtime_checkable
class SecretStore(Protocol):
    """Write and read opaque secret strings addressed by coordinates."""

    async def store_secret(self, coordinate: SecretCoordinate, payload: str) -> SecretCoordinate:
        """Store ``payload`` under ``coordinate`` and return the stored coordinate."""
        ...

    async def read_secret(self, coordinate: SecretCoordinate) -> str:
        """Return the payload stored under ``coordinate``."""
        ...
