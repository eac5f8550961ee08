# core/asset_resolver.py
"""
Path-traversal-safe static asset resolution

Everything here works on plain path strings so the checks can be used and
tested without a running server. The HTTP layer maps ForbiddenPath to 403 and
AssetNotFound to 404.
"""

import posixpath
import logging
from pathlib import Path
from typing import Union

from werkzeug.security import safe_join

from config.security import ALLOWED_ASSET_EXTENSIONS, HOMEPAGE_FILE
from core.errors import ForbiddenPath, AssetNotFound

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def clean_path(path: str) -> str:
    """
    Lexically canonicalize a slash-separated path

    Collapses repeated slashes, drops "." segments, resolves ".." against the
    preceding segment and strips trailing slashes. An empty path becomes ".".
    """
    if not path:
        return '.'

    cleaned = posixpath.normpath(path)
    # normpath keeps a leading "//", a URL path never means anything by it
    if cleaned.startswith('//'):
        cleaned = '/' + cleaned.lstrip('/')
    return cleaned


def check_traversal(path: str) -> None:
    """
    Reject paths that could escape the serving root

    Raises:
        ForbiddenPath: the path is not in canonical form, contains "..", or
            has a segment starting with "." (hidden files included)
    """
    cleaned = clean_path(path)
    if cleaned != path:
        raise ForbiddenPath(path, 'not canonical')
    if '..' in cleaned:
        raise ForbiddenPath(path, 'contains ..')

    for segment in path.strip('/').split('/'):
        if segment.startswith('.'):
            raise ForbiddenPath(path, f'hidden segment {segment!r}')


def asset_extension(filename: str) -> str:
    """Extension of the last path segment, including the dot"""
    return posixpath.splitext(posixpath.basename(filename))[1]


def is_allowed_asset(filename: str) -> bool:
    return asset_extension(filename) in ALLOWED_ASSET_EXTENSIONS


def _existing_file(root: PathLike, filename: str) -> Path:
    joined = safe_join(str(root), filename)
    if joined is None:
        raise ForbiddenPath(filename, 'escapes serving root')

    candidate = Path(joined)
    if not candidate.is_file():
        raise AssetNotFound(filename)
    return candidate


def resolve_asset(root: PathLike, filename: str) -> Path:
    """
    Resolve a requested asset to a file under the serving root

    Args:
        root: Directory assets are served from
        filename: Requested path relative to the root, without leading slash

    Returns:
        Path of an existing regular file

    Raises:
        ForbiddenPath: traversal attempt
        AssetNotFound: extension not served or file missing
    """
    check_traversal('/' + filename)

    if not is_allowed_asset(filename):
        raise AssetNotFound(filename, f'has disallowed extension {asset_extension(filename)!r}')

    return _existing_file(root, filename)


def resolve_homepage(root: PathLike) -> Path:
    """Path of the static homepage file, AssetNotFound when it is missing"""
    return _existing_file(root, HOMEPAGE_FILE)
