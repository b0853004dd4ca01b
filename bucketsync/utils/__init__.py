"""Utility modules for bucketsync.

Sub-packages:
- aws/ - boto3 session and S3 client construction
"""

from .config_loader import ConfigLoader, DEFAULT_CONFIG
from .file_utils import md5_file, iter_local_files, ensure_readable_dir
from .headers import HeaderProvider, to_put_object_args
from .logger import get_logger, setup_logging, log_group, report_failure
from .path_utils import normalize_path, to_file_key
from .validation import compile_filter_pattern, parse_bool, parse_positive_int, validate_regex

__all__ = [
    'ConfigLoader',
    'DEFAULT_CONFIG',
    'md5_file',
    'iter_local_files',
    'ensure_readable_dir',
    'HeaderProvider',
    'to_put_object_args',
    'get_logger',
    'setup_logging',
    'log_group',
    'report_failure',
    'normalize_path',
    'to_file_key',
    'compile_filter_pattern',
    'parse_bool',
    'parse_positive_int',
    'validate_regex',
]
