"""
Exceptions raised by bucketsync.
"""


class BucketSyncError(Exception):
    """Base exception for sync runs."""


class FilesystemError(BucketSyncError):
    """Raised when the local tree or one of its files cannot be read."""


class StorageError(BucketSyncError):
    """Raised when a listing, upload or delete fails on the storage side."""


class ConfigurationError(BucketSyncError):
    """Raised for missing or malformed configuration values."""
