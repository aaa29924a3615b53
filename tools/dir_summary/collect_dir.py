import os
import stat as statmod
import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from tools.dir_summary.models import DirectoryEntry, EntryKind, FilesystemError, SkippedEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def extension_of(name: str) -> Optional[str]:
    """
    Return the text after the last dot of a file name.

    A name whose only dot is the leading one (".env") has no extension,
    "archive.tar.gz" gives "gz" and "notes." gives "".
    """
    head, dot, tail = name.rpartition(".")
    if not dot or not head:
        return None
    return tail


def lossy_text(value) -> str:
    """Path or name as printable text; undecodable bytes become U+FFFD"""
    value = os.fspath(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    # Undecodable bytes come back from the OS as surrogates
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _modified_at(st: os.stat_result) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _to_entry(name: str, st: os.stat_result) -> DirectoryEntry:
    mode = st.st_mode
    if statmod.S_ISDIR(mode):
        return DirectoryEntry(
            name=name,
            kind=EntryKind.DIRECTORY,
            modified_at=_modified_at(st),
            is_hidden=name.startswith("."),
        )

    return DirectoryEntry(
        name=name,
        kind=EntryKind.FILE,
        extension=extension_of(name),
        size_bytes=int(st.st_size) if statmod.S_ISREG(mode) else None,
        modified_at=_modified_at(st),
        is_hidden=name.startswith("."),
    )


def collect_dir(path: PathLike,
                tolerant: bool = False,
                skipped: Optional[List[SkippedEntry]] = None) -> List[DirectoryEntry]:
    """
    Read the immediate children of a directory.

    Symlinks are not followed: a link to a directory is reported as a file
    without a size. Entries come back in filesystem iteration order.

    Args:
        path: Directory to read
        tolerant: Skip children whose metadata cannot be read instead of failing
        skipped: Optional list receiving the children left out in tolerant mode

    Returns:
        One DirectoryEntry per child

    Raises:
        FilesystemError: If the directory cannot be opened or iterated, or
            (unless tolerant) a child's metadata cannot be read
    """
    dir_path = os.fspath(path)
    display_path = lossy_text(dir_path)
    logger.info(f"📂 Collecting entries in: {display_path}")

    entries: List[DirectoryEntry] = []
    try:
        with os.scandir(dir_path) as it:
            for dir_entry in it:
                name = lossy_text(dir_entry.name)
                try:
                    st = dir_entry.stat(follow_symlinks=False)
                except OSError as e:
                    if not tolerant:
                        raise FilesystemError(
                            f"Failed to read metadata for '{name}' in {display_path}: {e.strerror or e}",
                            lossy_text(dir_entry.path),
                        ) from e
                    logger.warning(f"⚠️ Skipping unreadable entry '{name}': {e}")
                    if skipped is not None:
                        skipped.append(SkippedEntry(name=name, reason=str(e.strerror or e)))
                    continue

                entries.append(_to_entry(name, st))
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {display_path}: {e.strerror or e}", display_path) from e

    logger.info(f"✅ Collected {len(entries)} entries from {display_path}")
    return entries
