"""
Local inventory: walks the source directory and fingerprints its files.
"""
import asyncio
import os
from typing import List, Tuple

from ...models.inventory import Inventory
from ...models.sync_config import DEFAULT_MAX_CONCURRENCY
from ...utils.async_utils import bounded, gather_all, run_blocking
from ...utils.file_utils import ensure_readable_dir, iter_local_files, md5_file
from ...utils.logger import get_logger
from ...utils.validation import compile_filter_pattern

log = get_logger(__name__)


class LocalInventory:
    """
    Builds the inventory of a local directory.

    A file is included iff the include pattern matches its key and the
    exclude pattern does not. Patterns are searched anywhere in the key.

    Args:
        root_dir: Directory to sync from
        include_pattern: Regular expression, empty for everything
        exclude_pattern: Regular expression, empty for nothing
        max_concurrency: Maximum files hashed at once
    """

    def __init__(self, root_dir, include_pattern="", exclude_pattern="",
                 max_concurrency=DEFAULT_MAX_CONCURRENCY):
        self.root_dir = os.path.abspath(root_dir)
        self.include = compile_filter_pattern(include_pattern, "include-regex", empty_matches_all=True)
        self.exclude = compile_filter_pattern(exclude_pattern, "exclude-regex", empty_matches_all=False)
        self.max_concurrency = max_concurrency

    def is_included(self, key: str) -> bool:
        """Apply the include/exclude filter to a file key."""
        return bool(self.include.search(key)) and not self.exclude.search(key)

    def collect_files(self) -> List[Tuple[str, str]]:
        """
        Walk the root and return the (key, path) pairs passing the filter.

        Raises:
            FilesystemError: If the root or a directory below it is unreadable
        """
        ensure_readable_dir(self.root_dir)

        selected = []
        for key, path in iter_local_files(self.root_dir):
            if not self.is_included(key):
                log.info("Skipping local file %s", key)
                continue
            selected.append((key, path))
        return selected

    async def build(self) -> Inventory:
        """
        Walk, filter and hash the local tree.

        Returns:
            Inventory with one entry per included file, in walk order

        Raises:
            FilesystemError: If the root or any included file is unreadable
        """
        files = await run_blocking(self.collect_files)
        semaphore = asyncio.Semaphore(self.max_concurrency)
        hash_file = bounded(semaphore, run_blocking)

        digests = await gather_all(hash_file(md5_file, path) for _, path in files)

        inventory = Inventory(zip((key for key, _ in files), digests))
        log.info("Found %d local file(s) in %s", len(inventory), self.root_dir)
        return inventory


async def list_local(root_dir, include_pattern="", exclude_pattern="",
                     max_concurrency=DEFAULT_MAX_CONCURRENCY) -> Inventory:
    """Shortcut for ``LocalInventory(...).build()``."""
    return await LocalInventory(root_dir, include_pattern, exclude_pattern, max_concurrency).build()
