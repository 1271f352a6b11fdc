"""
Prebuilt artifact cache inspection.

The dispatcher only ever reads the cache entry. Creating or refreshing the
archive is the fetcher's job.
"""

from datetime import datetime
from pathlib import Path
from typing import NamedTuple, Optional


BYTES_PER_MB = 1024 * 1024


class ArtifactCacheEntry(NamedTuple):
    """
    State of the expected prebuilt archive on disk.

    FIELDS:
    - path: Where the archive is expected
    - exists: Is there a file at path?
    - size_bytes: File size, 0 when missing
    - modified: Last-modified time (local), None when missing
    """
    path: Path
    exists: bool
    size_bytes: int = 0
    modified: Optional[datetime] = None

    @property
    def size_display(self) -> str:
        return format_size_mb(self.size_bytes)

    @property
    def modified_display(self) -> str:
        return format_timestamp(self.modified) if self.modified else "unknown"


def inspect_artifact(path: Path) -> ArtifactCacheEntry:
    """
    Stat the archive at path.

    Only regular files count as a cache hit; a directory left at the archive
    path does not.
    """
    if not path.is_file():
        return ArtifactCacheEntry(path=path, exists=False)

    stats = path.stat()
    return ArtifactCacheEntry(
        path=path,
        exists=True,
        size_bytes=stats.st_size,
        modified=datetime.fromtimestamp(stats.st_mtime),
    )


def format_size_mb(size_bytes: int) -> str:
    """
    Format a byte count as megabytes with two decimals.

    Example: 10485760 -> "10.00 MB"
    """
    return f"{size_bytes / BYTES_PER_MB:.2f} MB"


def format_timestamp(moment: datetime) -> str:
    """Locale-style date and time, e.g. "10/18/2026, 3:04:05 PM"."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"
    )
