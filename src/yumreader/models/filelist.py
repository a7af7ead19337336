from functools import cached_property

from yumreader.models.base import Record


class FileListRecord(Record):
    """A package entry from filelists.xml."""

    @cached_property
    def name(self) -> str:
        return self._text("/filelists:package/@name")

    @cached_property
    def arch(self) -> str:
        return self._text("/filelists:package/@arch")

    @cached_property
    def version(self) -> str:
        return self._text("/filelists:package/filelists:version/@ver")

    @cached_property
    def release(self) -> str:
        return self._text("/filelists:package/filelists:version/@rel")

    @cached_property
    def files(self) -> list[str]:
        return self._strings("/filelists:package/filelists:file/text()")

    @cached_property
    def directories(self) -> list[str]:
        return self._strings('/filelists:package/filelists:file[@type="dir"]/text()')
