"""
File system utilities
"""
import hashlib
import logging
import os
from typing import Iterator, Tuple

from ..exceptions import FilesystemError
from .path_utils import to_file_key

log = logging.getLogger(__name__)

HASH_CHUNK_SIZE = 1024 * 1024


def md5_file(filepath, chunk_size=HASH_CHUNK_SIZE):
    """
    Compute the MD5 digest of a file's full content.

    Args:
        filepath: Path to the file
        chunk_size: Read size in bytes

    Returns:
        Lowercase hexadecimal digest

    Raises:
        FilesystemError: If the file cannot be read
    """
    digest = hashlib.md5()
    try:
        with open(filepath, 'rb') as f:
            for chunk in iter(lambda: f.read(chunk_size), b''):
                digest.update(chunk)
    except OSError as e:
        raise FilesystemError(f"Cannot read {filepath}: {e}") from e
    return digest.hexdigest()


def ensure_readable_dir(directory):
    """
    Check that *directory* exists, is a directory and can be listed.

    Raises:
        FilesystemError: Otherwise
    """
    if not os.path.exists(directory):
        raise FilesystemError(f"Local path does not exist: {directory}")
    if not os.path.isdir(directory):
        raise FilesystemError(f"Local path is not a directory: {directory}")
    if not os.access(directory, os.R_OK | os.X_OK):
        raise FilesystemError(f"Local path is not readable: {directory}")


def iter_local_files(root) -> Iterator[Tuple[str, str]]:
    """
    Walk *root* recursively and yield its regular files.

    Directories are descended without following symlinked directories;
    symlinks pointing at regular files are yielded like files; sockets,
    FIFOs, devices and dangling links are skipped. Each call starts a
    fresh traversal.

    Args:
        root: Directory to walk

    Yields:
        Tuples of (file_key, absolute_path)

    Raises:
        FilesystemError: If a directory cannot be listed
    """
    pending = [os.path.abspath(root)]
    base = pending[0]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise FilesystemError(f"Cannot list directory {current}: {e}") from e

        subdirs = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path)
                elif entry.is_file():
                    yield to_file_key(entry.path, base), entry.path
                else:
                    log.debug("Ignoring non-regular entry %s", entry.path)
            except OSError as e:
                raise FilesystemError(f"Cannot stat {entry.path}: {e}") from e

        # Depth-first, alphabetical
        pending.extend(reversed(subdirs))
