"""
One-way sync engine.

Provides :class:`SyncService`, which coordinates the local and remote
inventories, the reconciler and the action executor for one run.
"""
import asyncio
from typing import Optional, Tuple

from ..models.inventory import ActionList, Inventory, SyncReport
from ..models.sync_config import SyncConfig
from ..utils.headers import HeaderProvider
from ..utils.logger import get_logger, log_group
from ..utils.path_utils import normalize_path
from .executor import ActionExecutor
from .inventory.local import LocalInventory
from .inventory.remote import RemoteInventory
from .reconciler import reconcile
from .retry import RetryPolicy
from .storage.base import StorageTransport

log = get_logger(__name__)


class SyncService:
    """Synchronizes a local directory into a bucket prefix.

    All configuration is validated when the service is built, before any
    file is read or any request is sent.

    Args:
        config: Run configuration
        storage: Transport to use; built from *config* with boto3 when None
        retry_policy: Policy for remote calls; built from ``config.retry``
            when None
    """

    def __init__(self, config: SyncConfig, storage: Optional[StorageTransport] = None,
                 retry_policy: Optional[RetryPolicy] = None):
        self.config = config
        self.remote_prefix = normalize_path(config.remote_path, False, True, "")
        self.header_provider = HeaderProvider.parse(config.headers)
        self.retry_policy = retry_policy or RetryPolicy(config.retry)
        self.local_inventory = LocalInventory(
            config.local_path,
            config.include_regex,
            config.exclude_regex,
            max_concurrency=config.max_concurrency,
        )

        if storage is None:
            from ..utils.aws.aws_utils import create_storage_client
            from .storage.operations import S3Operations
            storage = S3Operations(create_storage_client(config), config.bucket)
        self.storage = storage

    def _executor(self) -> ActionExecutor:
        return ActionExecutor(
            self.storage,
            self.retry_policy,
            local_root=self.local_inventory.root_dir,
            remote_prefix=self.remote_prefix,
            header_provider=self.header_provider,
            delay_html=self.config.delay_html_file_upload,
            delete_remote=not self.config.no_delete_remote_files,
            max_concurrency=self.config.max_concurrency,
        )

    async def build_inventories(self) -> Tuple[Inventory, Inventory]:
        """Build the local and remote inventories concurrently."""
        remote_inventory = RemoteInventory(self.storage, self.retry_policy)
        with log_group("List files"):
            local, remote = await asyncio.gather(
                self.local_inventory.build(),
                remote_inventory.build(self.remote_prefix),
            )
        return local, remote

    async def plan(self) -> Tuple[ActionList, Inventory, Inventory]:
        """
        Compute the actions of a run without performing them.

        Returns:
            Tuple of (actions, local_inventory, remote_inventory)
        """
        local, remote = await self.build_inventories()
        actions = reconcile(local, remote, incremental=self.config.incremental)
        log.info(
            "%d file(s) to upload, %d remote file(s) missing locally",
            len(actions.upload), len(actions.delete),
        )
        return actions, local, remote

    async def run(self, dry_run: bool = False) -> SyncReport:
        """
        Perform one sync pass.

        Args:
            dry_run: Only compute and report the actions

        Returns:
            SyncReport of the run

        Raises:
            BucketSyncError: On the first unrecoverable error
        """
        log.info(
            "Syncing %s to bucket %s under %r (%s)",
            self.local_inventory.root_dir,
            self.config.bucket,
            self.remote_prefix,
            "incremental" if self.config.incremental else "full upload",
        )
        actions, local, remote = await self.plan()

        report = SyncReport(
            local_files=len(local),
            remote_files=len(remote),
            delete_skipped=self.config.no_delete_remote_files,
            dry_run=dry_run,
        )
        if dry_run:
            return report

        report.uploaded, report.deleted = await self._executor().execute(actions)
        return report


def run_sync(config: SyncConfig, storage: Optional[StorageTransport] = None, dry_run: bool = False) -> SyncReport:
    """Blocking entry point running :meth:`SyncService.run` in a fresh event loop."""
    service = SyncService(config, storage=storage)
    return asyncio.run(service.run(dry_run=dry_run))
