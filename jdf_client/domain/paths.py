"""Print-file path normalization for references inside JDF and JMF messages.

Print files are referenced by the path the remote JMF server sees, not the
path on the machine building the message. Local paths are therefore rebased
onto the configured server-side base path.
"""

from __future__ import annotations

from typing import Final

_DOMAIN_REMOTE_PATH_PREFIXES: Final[tuple[str, ...]] = ("http://", "https://", "\\\\", "//", "cid://")
_DOMAIN_BASE_PATH_SCHEME_PREFIXES: Final[tuple[str, ...]] = ("//", "\\\\", "http:", "https:", "file:")
_DOMAIN_FILE_SCHEME: Final[str] = "file://"


def domain_format_print_file_path(file_name: str, server_file_path: str) -> str:
    """Format a print file path so it resolves on the JMF server.

    Args:
        file_name: Caller supplied file path or URL.
        server_file_path: Server-side base path prepended to local paths.

    Returns:
        str: Remote URL left untouched, or the rebased `file://` reference.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if file_name.startswith(_DOMAIN_REMOTE_PATH_PREFIXES):
        return file_name

    local_path = file_name.removeprefix(_DOMAIN_FILE_SCHEME)
    remote_path = f"{server_file_path}{local_path}"
    if not server_file_path.startswith(_DOMAIN_BASE_PATH_SCHEME_PREFIXES):
        remote_path = f"{_DOMAIN_FILE_SCHEME}{remote_path}"
    return remote_path


__all__ = ["domain_format_print_file_path"]
