"""Stores an OAuth exchange result as a single secret.

Unlike regular connector creation, the credentials produced here are
written as one opaque string. Callers get back only the secret
coordinate and use it later to hydrate a connector configuration,
which means public API consumers keep track of one secret instead
of a set of them.
"""

import math
from typing import Any, Callable, Iterator, Mapping
from uuid import UUID, uuid4

from pydantic_core import PydanticSerializationError

from conduit.core.logging import logger
from conduit.core.protocols.secrets import SecretStore
from conduit.core.shared_models import SecretCoordinate
from conduit.domains.oauth.exceptions import OAuthSecretSerializationError
from conduit.domains.oauth.response import map_to_complete_oauth_response
from conduit.schemas.oauth import CompleteOAuthResponse

SECRET_ID_KEY = "secretId"
OAUTH_SECRET_VERSION = 1

secret_logger = logger.with_prefix("OAuth secrets: ").with_context(component="oauth_secret_writer")


def _non_finite_paths(value: Any, path: str = "$") -> Iterator[str]:
    if isinstance(value, float) and not math.isfinite(value):
        yield path
    elif isinstance(value, Mapping):
        for key, item in value.items():
            yield from _non_finite_paths(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _non_finite_paths(item, f"{path}[{index}]")


def generate_oauth_secret_coordinate(
    prefix: str,
    workspace_id: UUID,
    uuid_supplier: Callable[[], UUID] = uuid4,
) -> SecretCoordinate:
    """Mint a fresh coordinate. Always version 1; existing secrets are never updated."""
    coordinate_base = f"{prefix}{workspace_id}_secret_{uuid_supplier()}"
    return SecretCoordinate(coordinate_base=coordinate_base, version=OAUTH_SECRET_VERSION)


class OAuthResponseSecretWriter:
    """Serializes CompleteOAuthResponse payloads into the secret store."""

    def __init__(
        self,
        *,
        secret_store: SecretStore,
        prefix: str,
        uuid_supplier: Callable[[], UUID] = uuid4,
    ) -> None:
        """Store the secret backend and coordinate settings."""
        self._secret_store = secret_store
        self._prefix = prefix
        self._uuid_supplier = uuid_supplier

    async def write(
        self, workspace_id: UUID, payload: CompleteOAuthResponse
    ) -> CompleteOAuthResponse:
        """Write ``payload`` under a new coordinate and return the coordinate response.

        Raises:
            OAuthSecretSerializationError: If the payload cannot be rendered as JSON,
                or holds NaN or infinite numbers that JSON would turn into null.
        """
        non_finite = list(_non_finite_paths(payload.auth_payload))
        if non_finite:
            raise OAuthSecretSerializationError(
                f"non-finite numbers at {', '.join(non_finite)}"
            )
        try:
            payload_string = payload.model_dump_json()
        except PydanticSerializationError as e:
            raise OAuthSecretSerializationError(str(e)) from e

        coordinate = generate_oauth_secret_coordinate(
            self._prefix, workspace_id, self._uuid_supplier
        )
        stored = await self._secret_store.store_secret(coordinate, payload_string)
        secret_logger.with_context(workspace_id=str(workspace_id)).info(
            f"Stored OAuth response as secret {stored.full_coordinate}"
        )
        return map_to_complete_oauth_response({SECRET_ID_KEY: stored.full_coordinate})
