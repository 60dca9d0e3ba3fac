"""OAuth domain exceptions."""

from conduit.core.exceptions import ConduitException, ConfigValidationException


class OAuthSpecificationError(ConfigValidationException):
    """Raised when a connector's OAuth config specification is malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid OAuth config specification: {reason}")


class InvalidJsonPathError(ValueError):
    """Raised when a path expression cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path '{path}': {reason}")


class OAuthProviderNotSupportedError(ConduitException):
    """Raised when no OAuth flow is registered for a connector image."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"Requested OAuth implementation for {provider}, "
            "but it is not included in the OAuth mapping."
        )


class OAuthSecretSerializationError(ConfigValidationException):
    """Raised when an OAuth response cannot be written to a string for secret storage."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"OAuth response could not be serialized: {reason}")
