"""
Object-storage transport package.

- :mod:`base`       - the ``StorageTransport`` capability interface
- :mod:`operations` - S3 implementation on boto3
"""
from .base import StorageTransport, MAX_KEYS_PER_PAGE
from .operations import S3Operations

__all__ = [
    'StorageTransport',
    'S3Operations',
    'MAX_KEYS_PER_PAGE',
]
