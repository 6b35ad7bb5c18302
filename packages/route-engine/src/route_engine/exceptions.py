class NavigationError(Exception):
    """Base navigation exception."""


class AddressNotFoundError(NavigationError):
    """Raised when geocoding yields no result for an address."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Address not found: {address}")
        self.address = address


class NoRouteFoundError(NavigationError):
    """Raised when the direct route between source and destination is unavailable."""


class ProviderError(NavigationError):
    """Raised when an external provider request failed."""


class NavigationSupersededError(NavigationError):
    """Raised when a newer navigation for the same user replaced this one."""
