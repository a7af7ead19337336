"""Record views over repository metadata fragments."""

from .base import Record
from .changelog import ChangelogEntry, ChangelogRecord
from .filelist import FileListRecord
from .package import PackageRecord

__all__ = [
    "ChangelogEntry",
    "ChangelogRecord",
    "FileListRecord",
    "PackageRecord",
    "Record",
]
