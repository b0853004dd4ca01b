"""
Immutable run configuration
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict

DEFAULT_RETRY_ATTEMPTS = 5
DEFAULT_MAX_CONCURRENCY = 16

_SENSITIVE_FIELDS = ("access_key_secret", "security_token")


@dataclass(frozen=True)
class SyncConfig:
    """Configuration of one sync run.

    Built once by :class:`~bucketsync.utils.config_loader.ConfigLoader`
    and passed explicitly to every component.
    """

    access_key_id: str
    access_key_secret: str
    bucket: str
    endpoint: str
    local_path: str
    security_token: str = ""
    region: str = ""
    remote_path: str = ""
    include_regex: str = ""
    exclude_regex: str = ""
    headers: str = ""
    delay_html_file_upload: bool = False
    no_delete_remote_files: bool = False
    retry: int = DEFAULT_RETRY_ATTEMPTS
    incremental: bool = True
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    def to_display_dict(self) -> Dict[str, Any]:
        """Return the configuration with secrets masked."""
        data = asdict(self)
        for name in _SENSITIVE_FIELDS:
            value = data.get(name)
            if value and len(str(value)) > 4:
                data[name] = f"{str(value)[:4]}...{'*' * 8}"
            elif value:
                data[name] = "*" * 8
        return data
