"""
Storage transport interface.

Defines the capability the sync engine needs from an object store:
paginated listing, single-request upload and deletion. Implementations
are blocking; the engine calls them from worker threads, so they must
be safe for concurrent use.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from ...models.inventory import ListPage

MAX_KEYS_PER_PAGE = 1000


class StorageTransport(ABC):
    """Abstract base class for object-storage transports."""

    @abstractmethod
    def list_objects(
        self,
        prefix: str,
        continuation_token: Optional[str] = None,
        max_keys: int = MAX_KEYS_PER_PAGE,
    ) -> ListPage:
        """
        Return one page of objects whose name starts with *prefix*.

        Args:
            prefix: Key prefix to list under
            continuation_token: Token of the previous page, None for the first
            max_keys: Page size bound

        Returns:
            ListPage with the objects and the next token, if any
        """

    @abstractmethod
    def put_object(self, key: str, local_path: str, headers: Dict[str, str]) -> None:
        """
        Upload the file at *local_path* as a single object named *key*.

        Args:
            key: Full object name
            local_path: Path of the file to upload
            headers: HTTP headers to attach to the object
        """

    @abstractmethod
    def delete_object(self, key: str) -> None:
        """Delete the object named *key*."""
