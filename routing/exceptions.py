#Purpose: Error taxonomy for the safe-route core.
#ProviderUnavailableError is absorbed by the search (that direction is skipped).
#InvalidInputError means a caller bug and is always propagated.
#"No safe route" is not an error: the search returns None.


class SafeRouteError(Exception):
    """Base class for every error raised by the routing package."""
    pass


class ProviderUnavailableError(SafeRouteError):
    """The routing provider failed or returned no usable route."""
    pass


class InvalidInputError(SafeRouteError, ValueError):
    """Degenerate route, unknown direction or invalid policy value."""
    pass


class ConfigurationError(SafeRouteError, ValueError):
    """A provider client is missing its token or base URL."""
    pass
