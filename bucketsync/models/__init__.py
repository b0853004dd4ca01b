"""
Data models for bucketsync
"""

from .inventory import Inventory, ActionList, RemoteObject, ListPage, SyncReport
from .sync_config import SyncConfig, DEFAULT_RETRY_ATTEMPTS, DEFAULT_MAX_CONCURRENCY

__all__ = [
    'Inventory', 'ActionList', 'RemoteObject', 'ListPage', 'SyncReport',
    'SyncConfig', 'DEFAULT_RETRY_ATTEMPTS', 'DEFAULT_MAX_CONCURRENCY',
]
