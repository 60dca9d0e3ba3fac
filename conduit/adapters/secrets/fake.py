"""Fake secret store for testing.

Keeps payloads in plain text and records every write for assertions.
"""

from __future__ import annotations

from typing import Optional

from conduit.core.exceptions import NotFoundException
from conduit.core.shared_models import SecretCoordinate


class FakeSecretStore:
    """Test implementation of SecretStore.

    Usage::

        fake = FakeSecretStore()
        await fake.store_secret(SecretCoordinate("base", 1), "payload")
        assert fake.writes == [(SecretCoordinate("base", 1), "payload")]

        fake.seed_error(RuntimeError("backend down"))
        await fake.store_secret(...)  # raises RuntimeError
    """

    def __init__(self) -> None:
        self.writes: list[tuple[SecretCoordinate, str]] = []
        self._error: Optional[Exception] = None

    def seed_error(self, error: Exception) -> None:
        """Make every subsequent write raise ``error``."""
        self._error = error

    async def store_secret(self, coordinate: SecretCoordinate, payload: str) -> SecretCoordinate:
        if self._error is not None:
            raise self._error
        self.writes.append((coordinate, payload))
        return coordinate

    async def read_secret(self, coordinate: SecretCoordinate) -> str:
        for stored, payload in reversed(self.writes):
            if stored == coordinate:
                return payload
        raise NotFoundException(f"Secret not found: {coordinate.full_coordinate}")
