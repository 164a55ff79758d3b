class DatashelfError(Exception):
    """Base error for all user-facing Datashelf exceptions."""


class ConfigurationError(DatashelfError):
    """Raised when configuration is invalid or incomplete."""


class BootstrapError(DatashelfError):
    """Raised when the data directory or index document cannot be prepared."""


class StoreError(DatashelfError):
    """Base error for resource store operations."""


class ResourceNotFoundError(StoreError):
    """Raised when an operation targets a resource that does not exist."""


class InvalidIdentifierError(StoreError):
    """Raised when a resource identifier would escape the store root."""


class StorageFailureError(StoreError):
    """Raised when the underlying filesystem operation fails."""
