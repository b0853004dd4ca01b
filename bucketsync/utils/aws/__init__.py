"""Storage client sub-package.

Contains boto3 session and client construction.
"""
from .aws_utils import (
    create_storage_client,
    normalize_endpoint,
)

__all__ = [
    'create_storage_client',
    'normalize_endpoint',
]
