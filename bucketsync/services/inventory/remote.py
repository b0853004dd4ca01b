"""
Remote inventory: pages through the bucket listing under a prefix.
"""
from typing import Dict

from ...exceptions import StorageError
from ...models.inventory import Inventory, ListPage
from ...utils.async_utils import run_blocking
from ...utils.logger import get_logger
from ..retry import RetryPolicy
from ..storage.base import MAX_KEYS_PER_PAGE, StorageTransport

log = get_logger(__name__)


class RemoteInventory:
    """
    Builds the inventory of the objects stored under a prefix.

    Args:
        storage: Transport to list with
        retry_policy: Policy wrapping every page request
    """

    def __init__(self, storage: StorageTransport, retry_policy: RetryPolicy):
        self.storage = storage
        self.retry_policy = retry_policy

    async def _fetch_page(self, prefix: str, token) -> ListPage:
        return await self.retry_policy.run(
            lambda: run_blocking(self.storage.list_objects, prefix, token, MAX_KEYS_PER_PAGE),
            description=f"listing of {prefix!r}",
        )

    async def build(self, prefix: str) -> Inventory:
        """
        List every object under *prefix*.

        Args:
            prefix: Normalized prefix, ``""`` or ending in ``/``

        Returns:
            Inventory of key (prefix stripped) to lowercase ETag

        Raises:
            StorageError: If a page keeps failing after all retries, the
                transport returns an object outside *prefix*, or it hands
                back the continuation token it was given
        """
        entries: Dict[str, str] = {}
        token = None
        pages = 0

        while True:
            page = await self._fetch_page(prefix, token)
            pages += 1
            for obj in page.objects:
                if not obj.key.startswith(prefix):
                    raise StorageError(
                        f"Listing under {prefix!r} returned object {obj.key!r} outside the prefix"
                    )
                entries[obj.key[len(prefix):]] = obj.fingerprint()
            if not page.has_more():
                break
            if page.next_token == token:
                raise StorageError(
                    f"Listing under {prefix!r} returned continuation token {token!r} twice"
                )
            token = page.next_token

        log.info("Found %d remote file(s) under %r in %d page(s)", len(entries), prefix, pages)
        return Inventory(entries)


async def list_remote(storage: StorageTransport, prefix: str, retry_policy: RetryPolicy = None) -> Inventory:
    """Shortcut for ``RemoteInventory(storage, policy).build(prefix)``."""
    return await RemoteInventory(storage, retry_policy or RetryPolicy()).build(prefix)
