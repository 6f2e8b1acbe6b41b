"""Path segment parsing and prefix matching used by path forks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipework._internal.common.constants import PATH_SEPARATOR, PathErrorKind
from pipework._internal.exceptions import PathParseError

if TYPE_CHECKING:
    from collections.abc import Sequence


def split_path(path: str) -> tuple[str, ...]:
    return tuple(s for s in path.split(PATH_SEPARATOR) if s)


def parse_path(path: str) -> tuple[str, ...]:
    """Parse a fork prefix such as ``/api/v2`` into its segments.

    The prefix must start with ``/`` and contain at least one segment.
    Repeated and trailing separators are collapsed.
    """
    if not path.startswith(PATH_SEPARATOR):
        raise PathParseError(path, PathErrorKind.NO_LEADING_SLASH)

    segments = split_path(path)
    if not segments:
        raise PathParseError(path, PathErrorKind.EMPTY)

    return segments


def starts_with(segments: Sequence[str], prefix: Sequence[str]) -> bool:
    if len(prefix) > len(segments):
        return False
    return all(a == b for a, b in zip(segments, prefix, strict=False))
