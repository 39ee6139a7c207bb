"""
Pure path/name helpers. Nothing here touches storage.
"""

import os


def change_extension(file_name: str, ext: str) -> str:
    """
    Keep the same file name stem while replacing the extension.

    The extension may be given with or without the leading ".". An empty
    extension strips the current one.

        change_extension("foo.jpg", "txt")      # "foo.txt"
        change_extension("foo.bar.png", "jpg")  # "foo.bar.jpg"
        change_extension("foo", "txt")          # "foo.txt"
        change_extension("foo.txt", "")         # "foo"
    """
    if ext and not ext.startswith("."):
        ext = "." + ext

    current_ext = _extension(file_name)
    if current_ext == ext:
        return file_name
    return file_name[:len(file_name) - len(current_ext)] + ext


def _extension(file_name: str) -> str:
    """Suffix from the last "." in the final path element, or ""."""
    for i in range(len(file_name) - 1, -1, -1):
        ch = file_name[i]
        if ch in _separators():
            break
        if ch == ".":
            return file_name[i:]
    return ""


def _separators() -> str:
    return os.sep + (os.altsep or "")


def clean_path(path: str) -> str:
    """Lexically normalize a path. An empty path becomes "."."""
    if not path:
        return "."
    cleaned = os.path.normpath(path)
    # POSIX normpath keeps exactly two leading slashes; a root has one.
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = cleaned[1:]
    return cleaned


def join_path(base: str, *parts: str) -> str:
    """
    Join parts onto base and normalize the result.

    Every part is treated as relative to base, even one with a leading
    separator, and empty parts are ignored:

        join_path("data", "a/b")    # "data/a/b"
        join_path("data", "/a")     # "data/a"
        join_path("data/x", "..")   # "data"
        join_path("", "")           # "."
    """
    seps = _separators()
    relative = [p.lstrip(seps) for p in parts if p]
    elements = [e for e in [base, *relative] if e]
    if not elements:
        return "."
    return clean_path(os.path.join(*elements))
