"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from colorama import Fore, Style

from ..exceptions import BucketSyncError
from ..utils.logger import get_logger, report_failure

log = get_logger(__name__)


class ModeHandler(ABC):
    """Abstract base class for all mode handlers."""

    def __init__(self, args, config_loader=None, storage=None):
        """Initialize mode handler with parsed CLI arguments.

        Args:
            args: argparse namespace of the subcommand
            config_loader: Object exposing ``load(config_file, overrides)``;
                defaults to :class:`ConfigLoader`
            storage: Optional transport, built from the configuration when None
        """
        from ..utils.config_loader import ConfigLoader

        self.args = args
        self.config_loader = config_loader or ConfigLoader
        self.storage = storage
        self.config = None

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Every :class:`BucketSyncError` raised by a step is reported as the
        run's fatal error.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        try:
            context = self.prepare_context()
            if context is None:
                return 1

            result = self.execute_workflow(context)
        except BucketSyncError as e:
            report_failure(f"{type(e).__name__}: {e}")
            return 1
        except Exception as e:
            log.debug("Unexpected failure", exc_info=True)
            report_failure(f"Unexpected error: {e}")
            return 1

        if result is None or result is False:
            return 1

        self.display_completion(result)
        return 0

    @abstractmethod
    def display_banner(self):
        """Display mode-specific banner."""
        pass

    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Load the configuration and build the execution context.

        Returns:
            Context dictionary with the loaded ``config``
        """
        self.config = self.config_loader.load(
            getattr(self.args, 'config_file', None),
            overrides=cli_overrides(self.args),
        )
        log.debug("Effective configuration: %s", self.config.to_display_dict())
        return {"config": self.config}

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """
        pass

    def display_completion(self, result: Any):
        """Display completion message.

        Args:
            result: Result from execute_workflow
        """
        print(f"\n{Fore.GREEN}[SUCCESS] Done{Style.RESET_ALL}\n")


# CLI option dest -> configuration key
_OVERRIDE_OPTIONS = {
    'access_key_id': 'access-key-id',
    'access_key_secret': 'access-key-secret',
    'security_token': 'security-token',
    'bucket': 'bucket',
    'endpoint': 'endpoint',
    'region': 'region',
    'local_path': 'local-path',
    'remote_path': 'remote-path',
    'include_regex': 'include-regex',
    'exclude_regex': 'exclude-regex',
    'headers': 'headers',
    'delay_html_file_upload': 'delay-html-file-upload',
    'no_delete_remote_files': 'no-delete-remote-files',
    'retry': 'retry',
    'incremental': 'incremental',
    'max_concurrency': 'max-concurrency',
}


def cli_overrides(args) -> Dict[str, Any]:
    """Collect the configuration values given explicitly on the command line."""
    overrides = {}
    for dest, key in _OVERRIDE_OPTIONS.items():
        value = getattr(args, dest, None)
        if value is not None:
            overrides[key] = value
    return overrides
