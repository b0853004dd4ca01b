"""
Sync services for bucketsync.

Provides modular service packages:
- storage/ - Object-storage transport interface and S3 implementation
- inventory/ - Local and remote inventory builders
"""
from .executor import ActionExecutor, plan_upload_batches
from .reconciler import reconcile
from .retry import RetryPolicy, resolve_max_attempts, with_retry
from .sync_engine import SyncService, run_sync

__all__ = [
    'ActionExecutor',
    'plan_upload_batches',
    'reconcile',
    'RetryPolicy',
    'resolve_max_attempts',
    'with_retry',
    'SyncService',
    'run_sync',
]
