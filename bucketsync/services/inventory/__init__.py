"""
Inventory builders.

- :mod:`local`  - walks and fingerprints the local tree
- :mod:`remote` - pages through the bucket listing
"""
from .local import LocalInventory, list_local
from .remote import RemoteInventory, list_remote

__all__ = [
    'LocalInventory',
    'RemoteInventory',
    'list_local',
    'list_remote',
]
