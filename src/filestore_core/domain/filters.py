"""
File filters used to limit which entries a list() call returns.

A filter is any callable taking a FileInfo and returning True to keep the
entry. Passing several filters to list() keeps entries that satisfy all of
them; with_exts() keeps entries that satisfy any of its extensions.

    json_files = fs.list("conf", with_ext("json"))
    images = fs.list("assets", with_exts("png", "jpg"), with_pattern("logo*"))
"""

import re
from typing import Callable, Iterable, Optional, Tuple

from .models import FileInfo

FileFilter = Callable[[FileInfo], bool]

PATTERN_SEPARATOR = "/"


def with_everything() -> FileFilter:
    """Filter that accepts every entry; behaves as though there were no filters."""
    return lambda info: True


def with_ext(extension: str) -> FileFilter:
    """Only accept entries whose name ends with the given extension."""
    # Not specifying any particular extension means allow everything.
    if extension in ("", "."):
        return with_everything()

    # Case-insensitive; "txt" and ".txt" are the same extension.
    extension = extension.lower()
    if extension.startswith("."):
        extension = extension[1:]
    suffix = "." + extension

    def _filter(info: FileInfo) -> bool:
        return info.name.lower().endswith(suffix)

    return _filter


def with_exts(*extensions: str) -> FileFilter:
    """Only accept entries that have one of the given extensions."""
    filters = [with_ext(extension) for extension in extensions]

    def _filter(info: FileInfo) -> bool:
        return any(f(info) for f in filters)

    return _filter


def with_pattern(pattern: str) -> FileFilter:
    """
    Only accept entries whose name matches a shell glob pattern.

    "*" never crosses a "/" and "/" in the pattern must line up with "/" in
    the name. "[...]" is a character set, negated by a leading "^" or "!".
    A backslash makes the next character literal. Matching is
    case-sensitive. A malformed pattern matches nothing.
    """
    if not pattern:
        return with_everything()

    segments = [_compile_segment(s) for s in pattern.split(PATTERN_SEPARATOR)]
    if any(segment is None for segment in segments):
        return lambda info: False

    def _filter(info: FileInfo) -> bool:
        name_segments = info.name.split(PATTERN_SEPARATOR)
        if len(name_segments) != len(segments):
            return False
        return all(p.fullmatch(n) for n, p in zip(name_segments, segments))

    return _filter


def _compile_segment(segment: str) -> Optional[re.Pattern]:
    """
    Compile one "/"-free piece of a glob pattern into a regex.

    Returns None when the piece is malformed: a trailing backslash, an empty
    or unterminated set, or a set with a bare "-" or a backwards range.
    """
    parts = []
    i = 0
    while i < len(segment):
        char = segment[i]
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "\\":
            i += 1
            if i == len(segment):
                return None
            parts.append(re.escape(segment[i]))
        elif char == "[":
            i += 1
            negated = i < len(segment) and segment[i] in "^!"
            if negated:
                i += 1
            members = []
            while True:
                if i >= len(segment):
                    return None
                if segment[i] == "]" and members:
                    break
                lo, i = _set_member(segment, i)
                if lo is None:
                    return None
                hi = lo
                if i < len(segment) and segment[i] == "-":
                    hi, i = _set_member(segment, i + 1)
                    if hi is None or hi < lo:
                        return None
                members.append(re.escape(lo) if lo == hi
                               else f"{re.escape(lo)}-{re.escape(hi)}")
            parts.append("[" + ("^" if negated else "") + "".join(members) + "]")
        else:
            parts.append(re.escape(char))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


def _set_member(segment: str, i: int) -> Tuple[Optional[str], int]:
    """Read one (possibly escaped) character of a set; None if it can't start one."""
    if i >= len(segment) or segment[i] in "-]":
        return None, i
    if segment[i] == "\\":
        i += 1
        if i >= len(segment):
            return None, i
    return segment[i], i + 1


def matches_all(info: FileInfo, filters: Iterable[FileFilter]) -> bool:
    """True when the entry satisfies every filter (and always with no filters)."""
    return all(f(info) for f in filters)
