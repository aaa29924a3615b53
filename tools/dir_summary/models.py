"""
Directory Summary Models
Typed records produced by the collector and the summary builder
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class EntryKind(Enum):
    """Kind of a directory child as reported by its own metadata"""
    FILE = "file"
    DIRECTORY = "directory"


class FilesystemError(Exception):
    """Raised when a directory (or one of its children) cannot be read"""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate child of the scanned directory"""
    name: str
    kind: EntryKind
    extension: Optional[str] = None  # raw case, lower-cased by the builder
    size_bytes: Optional[int] = None  # files only
    modified_at: Optional[datetime] = None
    is_hidden: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class SkippedEntry:
    """Child left out of a tolerant collection"""
    name: str
    reason: str


@dataclass
class Counts:
    total: int = 0
    files: int = 0
    dirs: int = 0
    hidden: int = 0


@dataclass
class NotableFiles:
    has_git: bool = False
    has_readme: bool = False
    has_license: bool = False
    has_dockerfile: bool = False
    has_ci: bool = False  # .github directory
    has_rust: bool = False
    has_node: bool = False
    has_python: bool = False


@dataclass
class SizeEntry:
    name: str
    bytes: int


@dataclass
class DirectorySummary:
    """
    Aggregate view of one directory.

    language_hints is always built in key order so serialized output
    is identical across runs and platforms.
    """
    path: str
    counts: Counts = field(default_factory=Counts)
    language_hints: Dict[str, int] = field(default_factory=dict)
    notable_files: NotableFiles = field(default_factory=NotableFiles)
    suspicious_files: List[str] = field(default_factory=list)
    top_file_by_size: List[SizeEntry] = field(default_factory=list)
