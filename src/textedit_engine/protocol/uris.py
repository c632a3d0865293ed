"""Document URI to filesystem path conversion."""

from __future__ import annotations

FILE_SCHEME = "file://"


def uri_to_path(uri: str) -> str:
    """Strip the ``file://`` prefix; paths are assumed to be already decoded.

    Anything without the prefix is returned unchanged.
    """

    if uri.startswith(FILE_SCHEME):
        return uri[len(FILE_SCHEME) :]
    return uri


def path_to_uri(path: str) -> str:
    return f"{FILE_SCHEME}{path}"


__all__ = ["FILE_SCHEME", "uri_to_path", "path_to_uri"]
