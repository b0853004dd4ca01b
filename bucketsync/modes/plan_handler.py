"""Handler for the 'plan' subcommand.

Usage:
    bucketsync plan
"""
import asyncio
import json

from colorama import Fore, Style

from ..services.sync_engine import SyncService
from .base_handler import ModeHandler


class PlanHandler(ModeHandler):
    """Handles ``bucketsync plan``: show what a sync would do, transfer nothing."""

    def display_banner(self):
        if getattr(self.args, 'json', False):
            return
        print(f"\n{Fore.CYAN}  ▸ Sync Plan (dry run){Style.RESET_ALL}\n")

    def execute_workflow(self, context: dict):
        service = SyncService(context["config"], storage=self.storage)
        actions, _, _ = asyncio.run(service.plan())
        return actions

    def display_completion(self, actions):
        if getattr(self.args, 'json', False):
            print(json.dumps(actions.to_dict(), indent=2))
            return

        if actions.is_empty():
            print(f"{Fore.GREEN}[INFO] Bucket is up to date, nothing to do{Style.RESET_ALL}\n")
            return

        print(f"{Fore.CYAN}Upload ({len(actions.upload)}):{Style.RESET_ALL}")
        for key in actions.upload:
            print(f"  + {key}")

        deletes_disabled = self.config is not None and self.config.no_delete_remote_files
        label = "Delete (disabled)" if deletes_disabled else "Delete"
        print(f"{Fore.CYAN}{label} ({len(actions.delete)}):{Style.RESET_ALL}")
        for key in actions.delete:
            print(f"  - {key}")
        print()
