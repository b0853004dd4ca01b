"""Handler for the 'sync' subcommand.

Usage:
    bucketsync sync --local-path ./public --remote-path site/
"""
import asyncio

from colorama import Fore, Style

from ..services.sync_engine import SyncService
from .base_handler import ModeHandler


class SyncHandler(ModeHandler):
    """Handles ``bucketsync sync``: mirror the local tree into the bucket."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Bucket Sync{Style.RESET_ALL}\n")

    def execute_workflow(self, context: dict):
        service = SyncService(context["config"], storage=self.storage)
        return asyncio.run(service.run())

    def display_completion(self, report):
        print(f"\n{Fore.GREEN}[SUCCESS] Sync complete{Style.RESET_ALL}")
        print(f"{Fore.CYAN}Summary:{Style.RESET_ALL}")
        print(f"  Local files:   {report.local_files}")
        print(f"  Remote files:  {report.remote_files}")
        print(f"  Uploaded:      {report.uploaded}")
        if report.delete_skipped:
            print("  Deleted:       skipped (no-delete-remote-files)")
        else:
            print(f"  Deleted:       {report.deleted}")
        print()
