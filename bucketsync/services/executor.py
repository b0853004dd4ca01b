"""
Executes upload and delete actions against the bucket.

Uploads run first, optionally in two strictly sequential batches so
that markup files are published only after the assets they reference.
Deletes run after the whole upload phase. Every transfer is retried
independently; the first transfer that exhausts its retries fails the
run once its batch has settled.
"""
import asyncio
import os
from typing import List, Optional, Sequence, Tuple

from ..models.inventory import ActionList
from ..models.sync_config import DEFAULT_MAX_CONCURRENCY
from ..utils.async_utils import bounded, gather_all, run_blocking
from ..utils.headers import HeaderProvider
from ..utils.logger import get_logger, log_group
from ..utils.path_utils import join_key
from .retry import RetryPolicy
from .storage.base import StorageTransport

log = get_logger(__name__)

DEFERRED_EXTENSION = ".html"


def plan_upload_batches(keys: Sequence[str], deferred_extension: Optional[str] = None) -> List[List[str]]:
    """
    Split upload keys into sequential batches.

    Args:
        keys: Keys to upload
        deferred_extension: When set, keys ending with it (case-insensitive)
            form a second batch uploaded after all other keys

    Returns:
        List of batches, each in the order of *keys*

    Example:
        >>> plan_upload_batches(["x.html", "y.js", "z.HTML"], ".html")
        [['y.js'], ['x.html', 'z.HTML']]
    """
    if not deferred_extension:
        return [list(keys)]

    suffix = deferred_extension.lower()
    first = [key for key in keys if not key.lower().endswith(suffix)]
    second = [key for key in keys if key.lower().endswith(suffix)]
    return [first, second]


class ActionExecutor:
    """
    Performs an :class:`ActionList` through a storage transport.

    Args:
        storage: Transport to upload to and delete from
        retry_policy: Policy wrapping every transfer
        local_root: Directory the upload keys are relative to
        remote_prefix: Normalized prefix prepended to every key
        header_provider: Computes the headers of each uploaded key
        delay_html: Upload ``.html`` files in a second batch
        delete_remote: Run the delete phase
        max_concurrency: Maximum transfers in flight
    """

    def __init__(
        self,
        storage: StorageTransport,
        retry_policy: RetryPolicy,
        local_root: str,
        remote_prefix: str = "",
        header_provider: Optional[HeaderProvider] = None,
        delay_html: bool = False,
        delete_remote: bool = True,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        self.storage = storage
        self.retry_policy = retry_policy
        self.local_root = os.path.abspath(local_root)
        self.remote_prefix = remote_prefix
        self.header_provider = header_provider or HeaderProvider()
        self.delay_html = delay_html
        self.delete_remote = delete_remote
        self.max_concurrency = max_concurrency

    def _local_path(self, key: str) -> str:
        return os.path.join(self.local_root, *key.split("/"))

    async def upload(self, key: str) -> None:
        """Upload one key with retries."""
        remote_key = join_key(self.remote_prefix, key)
        local_path = self._local_path(key)
        headers = self.header_provider.headers_for(key)
        await self.retry_policy.run(
            lambda: run_blocking(self.storage.put_object, remote_key, local_path, headers),
            description=f"upload of {key!r}",
        )
        log.info("Uploaded file %s", key)

    async def delete(self, key: str) -> None:
        """Delete one key with retries."""
        remote_key = join_key(self.remote_prefix, key)
        await self.retry_policy.run(
            lambda: run_blocking(self.storage.delete_object, remote_key),
            description=f"deletion of {key!r}",
        )
        log.info("Deleted file %s", key)

    async def upload_all(self, keys: Sequence[str]) -> int:
        """
        Run the upload phase.

        Returns:
            Number of files uploaded
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)
        upload = bounded(semaphore, self.upload)
        batches = plan_upload_batches(keys, DEFERRED_EXTENSION if self.delay_html else None)

        uploaded = 0
        with log_group("Upload files"):
            for index, batch in enumerate(batches, start=1):
                if not batch:
                    continue
                log.debug("Upload batch %d/%d: %d file(s)", index, len(batches), len(batch))
                await gather_all(upload(key) for key in batch)
                uploaded += len(batch)
        return uploaded

    async def delete_all(self, keys: Sequence[str]) -> int:
        """
        Run the delete phase.

        Returns:
            Number of objects deleted
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)
        delete = bounded(semaphore, self.delete)
        with log_group("Delete files"):
            await gather_all(delete(key) for key in keys)
        return len(keys)

    async def execute(self, actions: ActionList) -> Tuple[int, int]:
        """
        Upload, then delete.

        Args:
            actions: Actions computed by the reconciler

        Returns:
            Tuple of (uploaded_count, deleted_count)
        """
        uploaded = await self.upload_all(actions.upload)

        deleted = 0
        if self.delete_remote:
            deleted = await self.delete_all(actions.delete)
        elif actions.delete:
            log.info("Keeping %d remote file(s) missing locally (deletion disabled)", len(actions.delete))

        return uploaded, deleted
