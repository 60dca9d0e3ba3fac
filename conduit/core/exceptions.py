"""Shared exceptions module."""

from typing import Optional


class ConduitException(Exception):
    """Base exception for Conduit services."""

    pass


class NotFoundException(ConduitException):
    """Exception raised when an object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class ConfigValidationException(ConduitException):
    """Exception raised when configuration supplied by a connector or caller is malformed."""

    def __init__(self, message: Optional[str] = "Invalid configuration"):
        """Create a new ConfigValidationException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
