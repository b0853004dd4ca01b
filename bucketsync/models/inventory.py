"""
Inventory snapshots, action lists and remote listing pages
"""
from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class Inventory(Mapping):
    """
    Immutable snapshot mapping file keys to content fingerprints.

    Keys are POSIX relative paths, fingerprints are lowercase hex
    digests. Iteration follows insertion order of the source listing.
    """

    def __init__(self, entries: Optional[Iterable[Tuple[str, str]]] = None):
        """
        Initialize an Inventory.

        Args:
            entries: Mapping or iterable of ``(key, fingerprint)`` pairs;
                a repeated key keeps the last fingerprint
        """
        data: Dict[str, str] = dict(entries or ())
        self._entries = MappingProxyType(data)

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Inventory({dict(self._entries)!r})"

    def to_dict(self) -> Dict[str, str]:
        """Serialize to dictionary"""
        return dict(self._entries)


class ActionList:
    """
    Upload and delete actions derived from two inventories.

    Both sequences keep the iteration order of the inventory they were
    derived from.
    """

    def __init__(self, upload: Iterable[str] = (), delete: Iterable[str] = ()):
        self.upload: Tuple[str, ...] = tuple(upload)
        self.delete: Tuple[str, ...] = tuple(delete)

    def is_empty(self) -> bool:
        """True when there is nothing to upload or delete."""
        return not self.upload and not self.delete

    def __eq__(self, other) -> bool:
        if not isinstance(other, ActionList):
            return NotImplemented
        return self.upload == other.upload and self.delete == other.delete

    def __repr__(self) -> str:
        return f"ActionList(upload={list(self.upload)!r}, delete={list(self.delete)!r})"

    def to_dict(self) -> Dict[str, List[str]]:
        """Serialize to dictionary"""
        return {"upload": list(self.upload), "delete": list(self.delete)}


class RemoteObject:
    """An object entry returned by a bucket listing."""

    def __init__(self, key: str, etag: str):
        self.key = key
        self.etag = etag

    def fingerprint(self) -> str:
        """ETag with quote characters stripped, lowercased."""
        return self.etag.replace('"', "").lower()

    def __repr__(self) -> str:
        return f"RemoteObject(key={self.key!r}, etag={self.etag!r})"


class ListPage:
    """One page of a paginated bucket listing."""

    def __init__(self, objects: Iterable[RemoteObject] = (), next_token: Optional[str] = None):
        self.objects: Tuple[RemoteObject, ...] = tuple(objects)
        self.next_token = next_token or None

    def has_more(self) -> bool:
        """True when the provider reported another page."""
        return self.next_token is not None


class SyncReport:
    """Outcome counts of a sync run."""

    def __init__(self, local_files=0, remote_files=0, uploaded=0, deleted=0,
                 delete_skipped=False, dry_run=False):
        self.local_files = local_files
        self.remote_files = remote_files
        self.uploaded = uploaded
        self.deleted = deleted
        self.delete_skipped = delete_skipped
        self.dry_run = dry_run

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "local_files": self.local_files,
            "remote_files": self.remote_files,
            "uploaded": self.uploaded,
            "deleted": self.deleted,
            "delete_skipped": self.delete_skipped,
            "dry_run": self.dry_run,
        }
