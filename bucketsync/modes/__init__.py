"""Mode handlers for the bucketsync CLI.

Subcommand handlers:
  - SyncHandler → bucketsync sync
  - PlanHandler → bucketsync plan
"""
from .base_handler import ModeHandler, cli_overrides
from .plan_handler import PlanHandler
from .sync_handler import SyncHandler

__all__ = ['ModeHandler', 'cli_overrides', 'PlanHandler', 'SyncHandler']
