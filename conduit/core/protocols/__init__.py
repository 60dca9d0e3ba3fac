"""Core protocols for dependency injection.

Domain-specific protocols (repositories, OAuth flows, registries) live in
their respective domains/ directories. This module keeps cross-cutting
infrastructure protocols only.
"""

from conduit.core.protocols.secrets import SecretStore

__all__ = [
    "SecretStore",
]
