import json
import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, List

from tools.dir_summary.collect_dir import lossy_text
from tools.dir_summary.models import (
    Counts,
    DirectoryEntry,
    DirectorySummary,
    NotableFiles,
    SizeEntry,
)

logger = logging.getLogger(__name__)

TOP_FILES_LIMIT = 5

# Suspicious name rules, evaluated independently of each other
SECRET_SUFFIXES = (".pem",)
SECRET_FRAGMENTS = ("id_rsa",)
DUMP_SUFFIXES = (".log", ".dump", ".sql")


def _is_secret_like(lower: str) -> bool:
    return (
        lower == ".env"
        or lower.endswith(SECRET_SUFFIXES)
        or any(fragment in lower for fragment in SECRET_FRAGMENTS)
    )


def _is_dump_like(lower: str) -> bool:
    return lower.endswith(DUMP_SUFFIXES)


def _mark_notable(lower: str, notable: NotableFiles):
    if lower == "readme" or lower.startswith("readme."):
        notable.has_readme = True
    if lower == "license" or lower.startswith("license."):
        notable.has_license = True
    if lower == "dockerfile":
        notable.has_dockerfile = True

    # Ecosystem markers
    if lower == "cargo.toml":
        notable.has_rust = True
    if lower == "package.json":
        notable.has_node = True
    # Singular "requirement.txt" is matched on purpose; "requirements.txt" is not
    if lower == "pyproject.toml" or lower == "requirement.txt":
        notable.has_python = True


def build_summary(path, entries: Iterable[DirectoryEntry]) -> DirectorySummary:
    """
    Aggregate collected entries into a DirectorySummary.

    Single pass over the entries followed by one stable sort of the size
    candidates. A name matching both suspicious rules is listed twice.

    Args:
        path: The scanned path, reported back as given (decoded lossily)
        entries: Entries from collect_dir, in scan order

    Returns:
        DirectorySummary
    """
    counts = Counts()
    notable = NotableFiles()
    ext_counts: Dict[str, int] = {}
    suspicious: List[str] = []
    size_entries: List[SizeEntry] = []

    for entry in entries:
        counts.total += 1

        if entry.is_hidden:
            counts.hidden += 1

        if entry.is_dir:
            counts.dirs += 1

            if entry.name == ".github":
                notable.has_ci = True
            if entry.name == ".git":
                notable.has_git = True
            continue

        counts.files += 1

        if entry.extension is not None:
            ext = entry.extension.lower()
            ext_counts[ext] = ext_counts.get(ext, 0) + 1

        if entry.size_bytes is not None:
            size_entries.append(SizeEntry(name=entry.name, bytes=entry.size_bytes))

        lower = entry.name.lower()
        _mark_notable(lower, notable)

        if _is_secret_like(lower):
            suspicious.append(entry.name)
        if _is_dump_like(lower):
            suspicious.append(entry.name)

    # sorted() stays stable with reverse=True, so ties keep scan order
    top_files = sorted(size_entries, key=lambda e: e.bytes, reverse=True)[:TOP_FILES_LIMIT]

    display_path = lossy_text(path)
    logger.debug(
        f"📊 Summary for {display_path}: {counts.total} entries "
        f"({counts.files} files, {counts.dirs} dirs, {counts.hidden} hidden), "
        f"{len(suspicious)} suspicious"
    )

    return DirectorySummary(
        path=display_path,
        counts=counts,
        language_hints=dict(sorted(ext_counts.items())),
        notable_files=notable,
        suspicious_files=suspicious,
        top_file_by_size=top_files,
    )


def summary_to_dict(summary: DirectorySummary) -> Dict[str, Any]:
    """Plain JSON-ready representation of a summary"""
    data = asdict(summary)
    data["language_hints"] = dict(sorted(summary.language_hints.items()))
    return data


def summary_to_json(summary: DirectorySummary, pretty: bool = False) -> str:
    """Render a summary as compact or indented JSON"""
    data = summary_to_dict(summary)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
