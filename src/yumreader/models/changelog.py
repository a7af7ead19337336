from datetime import datetime
from functools import cached_property

from pydantic import BaseModel

from yumreader.models.base import Record
from yumreader.utils import try_parse_date
from yumreader.version import extract_version, strip_bullet


class ChangelogEntry(BaseModel):
    """One ``<changelog>`` element of a package."""

    author: str = ""
    version: str | None = None
    date: datetime | None = None
    summary: str = ""


class ChangelogRecord(Record):
    """A package entry from other.xml, carrying its changelog history."""

    @cached_property
    def name(self) -> str:
        return self._text("/other:package/@name")

    @cached_property
    def arch(self) -> str:
        return self._text("/other:package/@arch")

    @cached_property
    def version(self) -> str:
        return self._text("/other:package/other:version/@ver")

    @cached_property
    def release(self) -> str:
        return self._text("/other:package/other:version/@rel")

    @cached_property
    def changelogs(self) -> list[ChangelogEntry]:
        """Changelog entries in document order."""
        if self.doc is None:
            return []
        entries = []
        for node in self.doc.xpath("/other:package/other:changelog", namespaces=self.namespaces):
            author = node.get("author", "")
            entries.append(
                ChangelogEntry(
                    author=author,
                    version=extract_version(author),
                    date=try_parse_date(node.get("date")),
                    summary=strip_bullet(node.text),
                )
            )
        return entries
