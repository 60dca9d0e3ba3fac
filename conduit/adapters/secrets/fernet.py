"""Fernet-encrypted, process-local secret store adapter."""

from __future__ import annotations

from cryptography.fernet import Fernet

from conduit.core.exceptions import NotFoundException
from conduit.core.shared_models import SecretCoordinate


class FernetSecretStore:
    """Keep secrets encrypted with Fernet in process memory.

    Suitable for local development and single-process deployments; a
    managed secret backend can replace it behind the same protocol.
    """

    def __init__(self, encryption_key: str) -> None:
        self._fernet = Fernet(encryption_key.encode())
        self._secrets: dict[str, str] = {}

    async def store_secret(self, coordinate: SecretCoordinate, payload: str) -> SecretCoordinate:
        self._secrets[coordinate.full_coordinate] = self._fernet.encrypt(payload.encode()).decode()
        return coordinate

    async def read_secret(self, coordinate: SecretCoordinate) -> str:
        encrypted = self._secrets.get(coordinate.full_coordinate)
        if encrypted is None:
            raise NotFoundException(f"Secret not found: {coordinate.full_coordinate}")
        return self._fernet.decrypt(encrypted.encode()).decode()
