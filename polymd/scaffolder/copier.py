"""Recursive template copying.

Copies a file or the *contents* of a directory to a destination, overwriting
existing files and creating directories as needed.  The outcome of each call
is reported as a :class:`CopyResult` rather than raised, so the caller decides
which conditions are fatal.
"""

from __future__ import annotations

import stat
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from polymd.utils import print_detail, print_warning


class CopyResult(str, Enum):
    """Outcome of a single :func:`copy_tree` call."""

    COPIED = "copied"
    SOURCE_MISSING = "source-missing"
    PERMISSION_DENIED = "permission-denied"
    DESTINATION_CONFLICT = "destination-conflict"

    @property
    def ok(self) -> bool:
        return self is CopyResult.COPIED


def copy_tree(
    source: str | Path,
    dest: str | Path,
    exclusions: Iterable[str] = (),
) -> CopyResult:
    """Copy *source* to *dest*.

    If *source* is a directory only its content is copied into *dest*; the
    directory itself is not recreated underneath.

    Args:
        source: A template file or directory.
        dest: Target file path, or target directory for a directory source.
        exclusions: Entry names to skip.  Only applied to the immediate
            children of *source*; nested directories are copied in full.

    Returns:
        ``COPIED`` on success.  For a directory, the first non-``COPIED``
        result of its entries, if any.
    """
    src = Path(source)
    dst = Path(dest)

    try:
        mode = src.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return CopyResult.SOURCE_MISSING
    except PermissionError:
        return CopyResult.PERMISSION_DENIED

    if stat.S_ISREG(mode):
        return _copy_file(src, dst)
    if not stat.S_ISDIR(mode):
        return CopyResult.SOURCE_MISSING

    try:
        dst.mkdir(parents=True, exist_ok=True)
    except (FileExistsError, NotADirectoryError):
        print_warning(f"  Will not copy {src.name} over the file {dst}.")
        return CopyResult.DESTINATION_CONFLICT
    except PermissionError:
        return CopyResult.PERMISSION_DENIED
    try:
        entries = list(src.iterdir())
    except PermissionError:
        return CopyResult.PERMISSION_DENIED

    skipped = set(exclusions)
    result = CopyResult.COPIED
    for entry in entries:
        if entry.name in skipped:
            print_detail(f"  Dropping file {entry.name} as ignored.")
            continue
        child = copy_tree(entry, dst / entry.name)
        if result.ok and not child.ok:
            result = child
    return result


def _copy_file(src: Path, dst: Path) -> CopyResult:
    if dst.is_dir():
        print_warning(f"  Will not copy {src.name} over the directory {dst}.")
        return CopyResult.DESTINATION_CONFLICT
    try:
        data = src.read_bytes()
        if dst.is_file():
            dst.unlink()
        print_detail(f"  Writing file {dst}")
        dst.write_bytes(data)
    except NotADirectoryError:
        print_warning(f"  Will not copy {src.name}: a parent of {dst} is a file.")
        return CopyResult.DESTINATION_CONFLICT
    except PermissionError:
        return CopyResult.PERMISSION_DENIED
    return CopyResult.COPIED
