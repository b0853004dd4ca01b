"""
Diffs a local and a remote inventory into upload and delete actions.
"""
from ..models.inventory import ActionList, Inventory


def reconcile(local: Inventory, remote: Inventory, incremental: bool = True) -> ActionList:
    """
    Derive the actions that make *remote* mirror *local*.

    In incremental mode a local key is uploaded only when the remote
    side lacks it or holds a different fingerprint; otherwise every
    local key is uploaded. Remote keys missing locally are deleted.

    Args:
        local: Local inventory
        remote: Remote inventory
        incremental: Upload only new or changed files

    Returns:
        ActionList ordered like the source inventories

    Example:
        >>> reconcile(Inventory({"a": "h1", "b": "h2"}), Inventory({"b": "h2", "c": "h3"}))
        ActionList(upload=['a'], delete=['c'])
    """
    upload = [
        key for key, fingerprint in local.items()
        if not incremental or remote.get(key) != fingerprint
    ]
    delete = [key for key in remote if key not in local]
    return ActionList(upload, delete)
