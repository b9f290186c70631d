"""
Exceptions raised by the Offboarding Engine.
"""


class OffboardingError(Exception):
    """Base class for offboarding engine errors."""


class ClearanceItemNotFoundError(OffboardingError, KeyError):
    """Raised when a clearance item id is not part of the catalog."""

    def __init__(self, item_id: str):
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"Unknown clearance item: {self.item_id}"


class ConfigurationError(OffboardingError):
    """Raised when a configuration file cannot be loaded."""
