"""Errors raised by the asset storage core."""


class StorageError(Exception):
    """Base class for every error the storage core raises."""


class IOFailure(StorageError):
    """Underlying storage is unavailable, denied or full."""


class UploadFailure(StorageError):
    """Inbound upload stream is empty, unreadable or too large."""


class InvalidStorageName(StorageError, ValueError):
    """Storage name is not a single safe path component."""


class AssetNotFound(StorageError):
    """No stored asset exists under the requested name."""
