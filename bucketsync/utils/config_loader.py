"""
Configuration loader for JSON files, CI inputs and CLI overrides
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ConfigurationError
from ..models.sync_config import DEFAULT_MAX_CONCURRENCY, DEFAULT_RETRY_ATTEMPTS, SyncConfig
from .logger import get_logger
from .validation import parse_bool, parse_positive_int

log = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = "bucketsync.json"

# Default configuration. Keys mirror the CI action inputs.
DEFAULT_CONFIG: Dict[str, Any] = {
    "access-key-id": "",
    "access-key-secret": "",
    "security-token": "",
    "bucket": "",
    "endpoint": "",
    "region": "",
    "local-path": "",
    "remote-path": "",
    "include-regex": "",
    "exclude-regex": "",
    "headers": "",
    "delay-html-file-upload": False,
    "no-delete-remote-files": False,
    "retry": DEFAULT_RETRY_ATTEMPTS,
    "incremental": True,
    "max-concurrency": DEFAULT_MAX_CONCURRENCY,
}

REQUIRED_KEYS = ("access-key-id", "access-key-secret", "bucket", "endpoint", "local-path")
BOOLEAN_KEYS = ("delay-html-file-upload", "no-delete-remote-files", "incremental")


class ConfigLoader:
    """Merges configuration sources into a :class:`SyncConfig`.

    Sources, lowest precedence first: ``DEFAULT_CONFIG``, a JSON config
    file, ``INPUT_*`` environment variables set by CI runners, and
    explicit overrides (CLI flags).
    """

    @staticmethod
    def get_config_path(filename=None):
        """
        Resolve the configuration file path.

        Args:
            filename: Explicit path, or None for ``bucketsync.json`` in
                the working directory

        Returns:
            Path object
        """
        return Path(filename) if filename else Path.cwd() / DEFAULT_CONFIG_FILENAME

    @staticmethod
    def load_config_file(filename=None, required=False) -> Dict[str, Any]:
        """
        Load a JSON configuration file.

        Args:
            filename: Path of the file, or None for the default location
            required: Raise if the file does not exist

        Returns:
            Dictionary of configuration values (empty if the default file
            is absent)

        Raises:
            ConfigurationError: For unreadable or malformed files and
                unknown keys
        """
        config_path = ConfigLoader.get_config_path(filename)
        if not config_path.exists():
            if required:
                raise ConfigurationError(f"Config file not found: {config_path}")
            return {}

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a JSON object")

        invalid_keys = [key for key in data if key not in DEFAULT_CONFIG]
        if invalid_keys:
            raise ConfigurationError(
                f"Invalid configuration key(s) in {config_path}: {', '.join(sorted(invalid_keys))}"
            )

        # A headers object may be given inline rather than as JSON text
        if isinstance(data.get("headers"), (dict, list)):
            data["headers"] = json.dumps(data["headers"])

        log.debug("Loaded configuration from %s", config_path)
        return data

    @staticmethod
    def load_env_inputs(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Collect ``INPUT_<KEY>`` variables as set by CI action runners.

        Both ``INPUT_LOCAL-PATH`` and ``INPUT_LOCAL_PATH`` are accepted.
        Empty values are ignored, as unset action inputs are exported as
        empty strings.

        Args:
            environ: Environment mapping, defaults to ``os.environ``

        Returns:
            Dictionary of configuration values
        """
        environ = os.environ if environ is None else environ
        values = {}
        for key in DEFAULT_CONFIG:
            for name in (f"INPUT_{key.upper()}", f"INPUT_{key.upper().replace('-', '_')}"):
                value = environ.get(name, "")
                if value.strip():
                    values[key] = value.strip() if key != "headers" else value
                    break
        return values

    @staticmethod
    def merge(*sources: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge sources over ``DEFAULT_CONFIG``; None values are skipped."""
        merged = dict(DEFAULT_CONFIG)
        for source in sources:
            for key, value in (source or {}).items():
                if value is None:
                    continue
                if key not in DEFAULT_CONFIG:
                    raise ConfigurationError(f"Unknown configuration key: {key}")
                merged[key] = value
        return merged

    @staticmethod
    def to_sync_config(values: Mapping[str, Any]) -> SyncConfig:
        """
        Validate merged values and build the immutable run configuration.

        Raises:
            ConfigurationError: For missing required keys or malformed booleans
        """
        missing = [key for key in REQUIRED_KEYS if not str(values.get(key) or "").strip()]
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

        booleans = {key: parse_bool(values[key], key) for key in BOOLEAN_KEYS}

        return SyncConfig(
            access_key_id=str(values["access-key-id"]).strip(),
            access_key_secret=str(values["access-key-secret"]).strip(),
            security_token=str(values.get("security-token") or "").strip(),
            bucket=str(values["bucket"]).strip(),
            endpoint=str(values["endpoint"]).strip(),
            region=str(values.get("region") or "").strip(),
            local_path=str(values["local-path"]),
            remote_path=str(values.get("remote-path") or ""),
            include_regex=str(values.get("include-regex") or ""),
            exclude_regex=str(values.get("exclude-regex") or ""),
            headers=str(values.get("headers") or ""),
            delay_html_file_upload=booleans["delay-html-file-upload"],
            no_delete_remote_files=booleans["no-delete-remote-files"],
            retry=parse_positive_int(values.get("retry"), DEFAULT_RETRY_ATTEMPTS),
            incremental=booleans["incremental"],
            max_concurrency=parse_positive_int(values.get("max-concurrency"), DEFAULT_MAX_CONCURRENCY),
        )

    @staticmethod
    def load(config_file=None, overrides=None, environ=None) -> SyncConfig:
        """
        Load the effective run configuration.

        Args:
            config_file: Explicit JSON config file (must exist), or None
                to use ``bucketsync.json`` if present
            overrides: Values taking precedence over every other source
            environ: Environment mapping for ``INPUT_*`` variables

        Returns:
            SyncConfig instance
        """
        file_values = ConfigLoader.load_config_file(config_file, required=config_file is not None)
        env_values = ConfigLoader.load_env_inputs(environ)
        return ConfigLoader.to_sync_config(ConfigLoader.merge(file_values, env_values, overrides))
