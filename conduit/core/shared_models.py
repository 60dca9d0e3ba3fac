"""Value types shared across domains and adapters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SecretCoordinate:
    """Reference to a stored secret: a base identifier plus a version.

    The full coordinate (``<base>_v<version>``) is what callers hold on to;
    the secret value itself never leaves the store.
    """

    coordinate_base: str
    version: int

    @property
    def full_coordinate(self) -> str:
        """Coordinate string handed back to callers."""
        return f"{self.coordinate_base}_v{self.version}"
