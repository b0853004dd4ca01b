"""
Path and object-key normalization helpers
"""
import posixpath
from pathlib import PurePath

_ROOT_FORMS = ("", "/", ".", "./")


def normalize_path(path: str, leading_slash: bool, trailing_slash: bool, when_root: str = "") -> str:
    """
    Canonicalize a prefix or key string without touching the filesystem.

    Resolves ``.``/``..`` segments and repeated separators, then enforces
    the presence or absence of a leading and a trailing slash. A path that
    collapses to the root is replaced by *when_root*, so the bucket root
    can be represented as ``""`` and keys concatenate without a separator.

    Args:
        path: Path or prefix to normalize
        leading_slash: Whether the result must start with ``/``
        trailing_slash: Whether the result must end with ``/``
        when_root: Value returned when the path denotes the root

    Returns:
        Normalized path

    Example:
        >>> normalize_path("a/b/../c", False, True, "")
        'a/c/'
        >>> normalize_path("/", False, True, "")
        ''
    """
    normalized = posixpath.normpath(path or ".")

    # normpath keeps a leading "//" (implementation-defined on POSIX)
    if normalized.startswith("/"):
        normalized = "/" + normalized.lstrip("/")

    if leading_slash and not normalized.startswith("/"):
        normalized = "/" + normalized
    if not leading_slash and normalized.startswith("/"):
        normalized = normalized[1:]

    if trailing_slash and not normalized.endswith("/"):
        normalized = normalized + "/"
    if not trailing_slash and normalized.endswith("/"):
        normalized = normalized[:-1]

    if normalized in _ROOT_FORMS or normalized in ("/./", "/."):
        return when_root

    return normalized


def to_file_key(path, root) -> str:
    """
    Build the ``/``-separated key of *path* relative to *root*.

    Args:
        path: File path inside *root*
        root: Directory the key is relative to

    Returns:
        POSIX relative path, never starting with ``/``
    """
    return PurePath(path).relative_to(PurePath(root)).as_posix()


def join_key(prefix: str, key: str) -> str:
    """Concatenate a normalized prefix (``""`` or ending in ``/``) and a key."""
    return prefix + key
