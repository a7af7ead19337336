from functools import cached_property

from yumreader.models.base import Record


class PackageRecord(Record):
    """A package entry from primary.xml."""

    @cached_property
    def name(self) -> str:
        return self._text("/common:package/common:name")

    @cached_property
    def arch(self) -> str:
        return self._text("/common:package/common:arch")

    @cached_property
    def epoch(self) -> str:
        return self._text("/common:package/common:version/@epoch")

    @cached_property
    def version(self) -> str:
        return self._text("/common:package/common:version/@ver")

    @cached_property
    def release(self) -> str:
        return self._text("/common:package/common:version/@rel")

    @cached_property
    def summary(self) -> str:
        return self._text("/common:package/common:summary")

    @cached_property
    def description(self) -> str:
        return self._text("/common:package/common:description")

    @cached_property
    def url(self) -> str:
        """Upstream project homepage."""
        return self._text("/common:package/common:url")

    @cached_property
    def packager(self) -> str:
        return self._text("/common:package/common:packager")

    @cached_property
    def location(self) -> str:
        """Path of the rpm relative to the repository base."""
        return self._text("/common:package/common:location/@href")

    @cached_property
    def checksum(self) -> str:
        return self._text("/common:package/common:checksum")

    @cached_property
    def src_rpm(self) -> str:
        return self._text("/common:package/common:format/rpm:sourcerpm")

    @cached_property
    def group(self) -> str:
        return self._text("/common:package/common:format/rpm:group")

    @cached_property
    def vendor(self) -> str:
        return self._text("/common:package/common:format/rpm:vendor")

    @cached_property
    def license(self) -> str:
        return self._text("/common:package/common:format/rpm:license")

    @cached_property
    def provides(self) -> list[str]:
        """Capability names this package provides, in document order."""
        return self._strings("/common:package/common:format/rpm:provides/rpm:entry/@name")

    @cached_property
    def requires(self) -> list[str]:
        """Capability names this package requires, in document order."""
        return self._strings("/common:package/common:format/rpm:requires/rpm:entry/@name")

    @property
    def nevra(self) -> str:
        """``name-[epoch:]version-release.arch``, omitting a zero or missing epoch."""
        epoch = f"{self.epoch}:" if self.epoch not in ("", "0") else ""
        nevra = f"{self.name}-{epoch}{self.version}-{self.release}"
        return f"{nevra}.{self.arch}" if self.arch else nevra
