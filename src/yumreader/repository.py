"""Record lists backed by a repository's secondary metadata documents."""

import logging
from collections.abc import Callable, Iterator
from io import BytesIO
from typing import ClassVar, Generic, TypeVar

from yumreader.extractor import iter_record_fragments
from yumreader.fetcher import CacheStore
from yumreader.models import ChangelogRecord, FileListRecord, PackageRecord, Record
from yumreader.repomd import Repomd
from yumreader.settings import Settings
from yumreader.utils import decompress, log_duration

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class RecordList(Generic[R]):
    """All records of one metadata role, loaded eagerly at construction."""

    role: ClassVar[str]
    record_type: ClassVar[type[Record]]
    record_tag: ClassVar[str] = "package"

    def __init__(self, url: str, settings: Settings | None = None, store: CacheStore | None = None):
        """Load every record of this list's role from a repository.

        Args:
            url: Repository base URL
            settings: Cache settings, ignored when ``store`` is given
            store: Cache store to fetch through

        Raises:
            ManifestUnavailableError: If repomd.xml can't be retrieved
            RoleNotFoundError: If the manifest has no document for this role
            RetrievalError: If the document can't be fetched
            MetadataParseError: If the document can't be decompressed or parsed
        """
        with Repomd(url, settings=settings, store=store) as repomd:
            self.url = repomd.url
            stream = repomd.resolved_document(self.role)
            try:
                with log_duration(f"Decompressing {self.role} metadata"):
                    content = decompress(stream.read())
                with log_duration(f"Building {self.record_type.__name__} objects"):
                    self._records: list[R] = [
                        self.record_type(fragment)
                        for fragment in iter_record_fragments(BytesIO(content), self.record_tag)
                    ]
            finally:
                stream.close()

        logger.info(f"Loaded {len(self._records)} {self.role} records from {self.url}")

    def all(self) -> list[R]:
        """All records, in document order."""
        return list(self._records)

    def each(self, visit: Callable[[R], object]) -> None:
        for record in self._records:
            visit(record)

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.url!r} ({len(self)} records)>"


class PackageList(RecordList[PackageRecord]):
    """Packages listed in a repository's primary.xml."""

    role = "primary"
    record_type = PackageRecord


class PackageChangelogList(RecordList[ChangelogRecord]):
    """Per-package changelogs from a repository's other.xml."""

    role = "other"
    record_type = ChangelogRecord


class PackageFileList(RecordList[FileListRecord]):
    """Per-package file lists from a repository's filelists.xml."""

    role = "filelists"
    record_type = FileListRecord
