"""Exceptions raised by yumreader."""


class YumReaderError(Exception):
    """Base class for all yumreader errors."""


class RetrievalError(YumReaderError):
    """A location could not be fetched (network, HTTP status or local I/O failure)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to retrieve {url}: {reason}")
        self.url = url
        self.reason = reason


class ManifestUnavailableError(YumReaderError):
    """The repository's repomd.xml could not be obtained."""

    def __init__(self, url: str):
        super().__init__(f"Repository manifest unavailable for {url}")
        self.url = url


class RoleNotFoundError(YumReaderError):
    """The manifest has no entry for the requested metadata role."""

    def __init__(self, role: str, url: str | None = None):
        msg = f"No '{role}' metadata in repository manifest"
        if url:
            msg += f" for {url}"
        super().__init__(msg)
        self.role = role
        self.url = url


class MetadataParseError(YumReaderError):
    """A metadata document could not be decompressed or parsed."""
