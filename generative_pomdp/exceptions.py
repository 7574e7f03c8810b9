"""Custom exception types."""


class GenerativePOMDPError(Exception):
    """Base class for errors raised by this package."""


class InvalidParameterError(GenerativePOMDPError, ValueError):
    """Raised when a model, distribution or run is configured with values outside their domain."""
