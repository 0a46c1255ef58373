"""Exception types shared across the package."""


class QuoteStyleError(ValueError):
    """Raised when a backend's quoting characters break the one-character assumption."""

    pass


class MetadataUnavailableError(Exception):
    """Raised when a backend does not expose the requested metadata collection."""

    def __init__(self, collection: str, reason: str = ""):
        self.collection = collection
        self.reason = reason
        message = f"Metadata collection '{collection}' is not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RestrictionNotSupportedError(MetadataUnavailableError):
    """Raised when a collection exists but the restriction shape is unsupported."""

    pass


class ConfigError(ValueError):
    """Raised when a configuration file is malformed."""

    pass
