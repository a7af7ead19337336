"""Repository manifest (repodata/repomd.xml) resolution."""

import logging
from pathlib import PurePosixPath
from typing import BinaryIO
from urllib.parse import urlparse

from lxml import etree
from pydantic import BaseModel, ConfigDict

from yumreader.constants import MANIFEST_FILENAME, NAMESPACES, REPODATA_DIR, XML_PARSER_OPTIONS
from yumreader.errors import ManifestUnavailableError, MetadataParseError, RetrievalError, RoleNotFoundError
from yumreader.fetcher import CacheStore, cache_namespace, join_location, normalize_repo_url
from yumreader.settings import Settings

logger = logging.getLogger(__name__)

_COMPRESSION_SUFFIXES = (".gz", ".xz", ".bz2")


class RepomdData(BaseModel):
    """A single ``<data>`` entry of the manifest."""

    model_config = ConfigDict(frozen=True)

    type: str
    location: str
    checksum: str | None = None
    checksum_type: str | None = None
    timestamp: int | None = None
    size: int | None = None
    open_size: int | None = None


class Manifest(BaseModel):
    """Parsed repomd.xml: the secondary metadata documents, in document order."""

    model_config = ConfigDict(frozen=True)

    revision: str = ""
    data: tuple[RepomdData, ...] = ()

    @property
    def roles(self) -> list[str]:
        return list(dict.fromkeys(entry.type for entry in self.data))

    def entries_for(self, role: str) -> list[RepomdData]:
        return [entry for entry in self.data if entry.type == role]


def _int_or_none(value: str | None) -> int | None:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def parse_manifest(content: bytes) -> Manifest:
    """Parse repomd.xml content into a Manifest.

    Raises:
        MetadataParseError: If the document is not well-formed XML
    """
    try:
        root = etree.fromstring(content, etree.XMLParser(**XML_PARSER_OPTIONS))
    except etree.XMLSyntaxError as e:
        raise MetadataParseError(f"Malformed repository manifest: {e}") from e

    ns = {"repo": NAMESPACES["repo"]}
    entries = []
    for node in root.xpath("/repo:repomd/repo:data", namespaces=ns):
        href = node.xpath("string(repo:location/@href)", namespaces=ns)
        if not href:
            logger.debug(f"Skipping manifest entry '{node.get('type')}' without a location")
            continue
        checksum = node.find("repo:checksum", ns)
        entries.append(
            RepomdData(
                type=node.get("type", ""),
                location=href,
                checksum=checksum.text.strip() if checksum is not None and checksum.text else None,
                checksum_type=checksum.get("type") if checksum is not None else None,
                timestamp=_int_or_none(node.xpath("string(repo:timestamp)", namespaces=ns)),
                size=_int_or_none(node.xpath("string(repo:size)", namespaces=ns)),
                open_size=_int_or_none(node.xpath("string(repo:open-size)", namespaces=ns)),
            )
        )
    revision = root.xpath("string(/repo:repomd/repo:revision)", namespaces=ns).strip()
    return Manifest(revision=revision, data=tuple(entries))


def document_filename(role: str, location: str) -> str:
    """Cache filename for a role's document, keeping the source's compression suffix.

    Examples:
        >>> document_filename("primary", "repodata/abc123-primary.xml.gz")
        'primary.xml.gz'
    """
    suffix = PurePosixPath(urlparse(location).path).suffix
    if suffix not in _COMPRESSION_SUFFIXES:
        suffix = ".gz" if suffix != ".xml" else ""
    return f"{role}.xml{suffix}"


class Repomd:
    """Resolves secondary metadata documents through a repository's repomd.xml."""

    def __init__(self, url: str, settings: Settings | None = None, store: CacheStore | None = None):
        """Fetch and parse the manifest for a repository.

        Args:
            url: Repository base URL (a trailing ``/repodata`` is accepted and stripped)
            settings: Cache settings, ignored when ``store`` is given
            store: Cache store to fetch through

        Raises:
            ManifestUnavailableError: If repomd.xml can't be retrieved
            MetadataParseError: If repomd.xml is malformed
        """
        self._owns_store = store is None
        self.store = store or CacheStore(settings)
        self.url = normalize_repo_url(url)
        self.namespace = cache_namespace(self.url)
        self._streams: dict[str, BinaryIO] = {}

        manifest_url = f"{self.url}/{REPODATA_DIR}/{MANIFEST_FILENAME}"
        try:
            stream = self.store.fetch_cached(self.namespace, MANIFEST_FILENAME, manifest_url)
        except RetrievalError as e:
            logger.error(f"Unable to retrieve repository manifest from {manifest_url}: {e.reason}")
            if self._owns_store:
                self.store.close()
            raise ManifestUnavailableError(self.url) from e

        try:
            with stream:
                self.manifest = parse_manifest(stream.read())
        except MetadataParseError:
            # don't keep serving a malformed manifest from the cache
            if self.store.settings.cache_enabled:
                self.store.entry_path(self.namespace, MANIFEST_FILENAME).unlink(missing_ok=True)
            if self._owns_store:
                self.store.close()
            raise
        logger.debug(f"Parsed manifest for {self.url}: roles {', '.join(self.manifest.roles) or '(none)'}")

    @property
    def roles(self) -> list[str]:
        """Metadata roles declared by the manifest, in document order."""
        return self.manifest.roles

    def locations_for(self, role: str) -> list[str]:
        """Absolute locations of all documents for a role, in document order."""
        return [join_location(self.url, entry.location) for entry in self.manifest.entries_for(role)]

    def primary(self) -> list[str]:
        return self.locations_for("primary")

    def filelists(self) -> list[str]:
        return self.locations_for("filelists")

    def other(self) -> list[str]:
        return self.locations_for("other")

    def resolved_document(self, role: str) -> BinaryIO:
        """Get a stream over the (still compressed) document for a role.

        The first manifest entry for the role is used. A stream returned earlier
        is handed back, rewound, while it is still open.

        Raises:
            RoleNotFoundError: If the manifest has no entry for the role
            RetrievalError: If the document had to be fetched and the fetch failed
        """
        stream = self._streams.get(role)
        if stream is not None and not stream.closed:
            stream.seek(0)
            return stream

        locations = self.locations_for(role)
        if not locations:
            raise RoleNotFoundError(role, self.url)

        stream = self.store.fetch_cached(self.namespace, document_filename(role, locations[0]), locations[0])
        self._streams[role] = stream
        return stream

    def close(self) -> None:
        """Close every stream handed out by ``resolved_document``, and the store if we created it."""
        for stream in self._streams.values():
            stream.close()
        self._streams.clear()
        if self._owns_store:
            self.store.close()

    def __enter__(self) -> "Repomd":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
