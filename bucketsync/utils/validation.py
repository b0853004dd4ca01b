"""
Configuration value validation utilities
"""
import re
from typing import Optional, Pattern

from ..exceptions import ConfigurationError

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")

# Never matches anything; used for an empty exclude pattern
NEVER_MATCH = re.compile(r"(?!)")


def validate_regex(pattern: str):
    """
    Validate a regular expression.

    Args:
        pattern: Regular expression source

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        re.compile(pattern)
    except re.error as e:
        return False, f"Invalid regular expression {pattern!r}: {e}"
    except TypeError:
        return False, f"Regular expression must be a string, got {type(pattern).__name__}"
    return True, ""


def compile_filter_pattern(pattern: Optional[str], name: str, empty_matches_all: bool) -> Pattern:
    """
    Compile an include or exclude pattern.

    An empty include pattern matches every key and an empty exclude
    pattern matches none, so the default configuration syncs everything.

    Args:
        pattern: Regular expression source (may be empty)
        name: Configuration key, used in error messages
        empty_matches_all: Behaviour of an empty pattern

    Returns:
        Compiled pattern

    Raises:
        ConfigurationError: If the pattern does not compile
    """
    if not pattern:
        return re.compile("") if empty_matches_all else NEVER_MATCH

    is_valid, error = validate_regex(pattern)
    if not is_valid:
        raise ConfigurationError(f"{name}: {error}")
    return re.compile(pattern)


def parse_bool(value, name: str) -> bool:
    """
    Parse a boolean configuration value.

    Accepts booleans and the strings true/false, 1/0, yes/no, on/off in
    any case.

    Raises:
        ConfigurationError: For any other value
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name}: expected a boolean (true/false), got {value!r}"
    )


def parse_positive_int(value, default: int) -> int:
    """
    Parse a positive integer, falling back to *default*.

    Booleans, floats with a fractional part, non-numeric strings and
    values below 1 all yield *default*.

    Example:
        >>> parse_positive_int("3", 5)
        3
        >>> parse_positive_int("0", 5)
        5
        >>> parse_positive_int("2.5", 5)
        5
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return default
        number = int(value)
    else:
        text = str(value).strip()
        if not re.fullmatch(r"[+-]?\d+", text):
            return default
        number = int(text)
    return number if number > 0 else default
