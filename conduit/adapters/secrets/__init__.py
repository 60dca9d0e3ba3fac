"""Secret store adapters."""

from conduit.adapters.secrets.fake import FakeSecretStore
from conduit.adapters.secrets.fernet import FernetSecretStore

__all__ = [
    "FakeSecretStore",
    "FernetSecretStore",
]
