"""Fake implementations for connector catalog testing."""

from conduit.domains.connectors.fakes.repository import (
    FakeActorDefinitionVersionRepository,
    FakeConnectorDefinitionRepository,
    FakeConnectorInstanceRepository,
    FakeOAuthParameterRepository,
)

__all__ = [
    "FakeActorDefinitionVersionRepository",
    "FakeConnectorDefinitionRepository",
    "FakeConnectorInstanceRepository",
    "FakeOAuthParameterRepository",
]
