"""Metadata retrieval and the on-disk cache for YUM repositories."""

import hashlib
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import BinaryIO
from urllib.parse import unquote, urljoin, urlparse

import httpx

from yumreader.constants import REPODATA_DIR
from yumreader.errors import RetrievalError
from yumreader.settings import Settings

logger = logging.getLogger(__name__)


def normalize_repo_url(url: str) -> str:
    """Reduce a repository URL to its canonical base form.

    Args:
        url: Repository base URL, optionally pointing at its repodata directory

    Returns:
        The URL without a trailing ``/repodata`` component or trailing slashes

    Examples:
        >>> normalize_repo_url("http://mirror.example.com/6.0/os/SRPMS/repodata/")
        'http://mirror.example.com/6.0/os/SRPMS'
    """
    url = url.strip().rstrip("/")
    suffix = f"/{REPODATA_DIR}"
    if url.endswith(suffix):
        url = url[: -len(suffix)].rstrip("/")
    return url


def cache_namespace(repo_url: str) -> str:
    """Get the cache subdirectory name for a repository.

    Args:
        repo_url: Repository URL (normalized before hashing)

    Returns:
        Hex digest identifying the repository in the cache
    """
    return hashlib.sha256(normalize_repo_url(repo_url).encode()).hexdigest()


def join_location(repo_url: str, href: str) -> str:
    """Join a manifest-relative href onto the repository base URL."""
    return urljoin(f"{normalize_repo_url(repo_url)}/", href)


def _local_path(url: str) -> Path | None:
    """Return the filesystem path for file:// URLs and bare paths, else None."""
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if not parsed.scheme or len(parsed.scheme) == 1:
        # no scheme, or a windows drive letter
        return Path(url)
    return None


def fetch_bytes(url: str, client: httpx.Client | None = None, timeout: float = 30.0) -> bytes:
    """Fetch the raw bytes behind a location.

    Args:
        url: An http(s) URL, a file:// URL or a local path
        client: Optional HTTP client to use; a temporary one is created otherwise
        timeout: Timeout for the temporary client

    Returns:
        The response body

    Raises:
        RetrievalError: On transport errors, non-2xx responses or local I/O errors
    """
    if (path := _local_path(url)) is not None:
        try:
            return path.read_bytes()
        except OSError as e:
            raise RetrievalError(url, str(e)) from e

    try:
        if client is not None:
            response = client.get(url)
        else:
            with httpx.Client(follow_redirects=True, timeout=timeout) as tmp_client:
                response = tmp_client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            logger.debug(f"Not found: {url}")
        else:
            logger.warning(f"Failed to download {url}: {e}")
        raise RetrievalError(url, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.warning(f"Failed to download {url}: {e}")
        raise RetrievalError(url, str(e) or type(e).__name__) from e

    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return response.content


class CacheStore:
    """Maps (namespace, filename) pairs to byte streams, fetching when the cache can't serve them."""

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None):
        """Initialize the cache store.

        Args:
            settings: Cache settings. Defaults to ``Settings()``
            client: HTTP client to fetch with. One is created (and owned) if not given
        """
        self.settings = settings or Settings()
        self._owns_client = client is None
        self.client = client or httpx.Client(follow_redirects=True, timeout=self.settings.timeout)

    def entry_path(self, namespace: str, filename: str) -> Path:
        """Get the on-disk location of a cache entry."""
        return self.settings.cache_path.expanduser() / namespace / filename

    def is_valid(self, path: Path) -> bool:
        """Check whether a cache entry exists and is younger than the configured TTL."""
        if not self.settings.cache_enabled or not path.is_file():
            return False
        age = time.time() - path.stat().st_mtime
        return age < self.settings.cache_expire

    def fetch_cached(self, namespace: str, filename: str, url: str) -> BinaryIO:
        """Get a readable stream for a metadata file.

        Args:
            namespace: Cache subdirectory, usually ``cache_namespace(repo_url)``
            filename: File name inside the namespace (e.g. ``primary.xml.gz``)
            url: Where to fetch the file from on a cache miss

        Returns:
            A binary stream positioned at the start of the content. The caller closes it.

        Raises:
            RetrievalError: If a fetch was needed and failed
        """
        if not self.settings.cache_enabled:
            logger.debug(f"Cache disabled, fetching {url}")
            data = fetch_bytes(url, self.client)
            stream = tempfile.TemporaryFile()
            stream.write(data)
            stream.seek(0)
            return stream

        path = self.entry_path(namespace, filename)
        if self.is_valid(path):
            logger.debug(f"Using cached {filename} at {path}")
            return path.open("rb")

        if path.exists():
            logger.debug(f"Cached {filename} at {path} expired, refreshing from {url}")
        else:
            logger.debug(f"Fetching {filename} from {url}")
        data = fetch_bytes(url, self.client)
        self._store(path, data)
        return path.open("rb")

    def _store(self, path: Path, data: bytes) -> None:
        """Write data to a sibling temp file and move it into place."""
        self.settings.ensure_cache_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        # mtime is the only expiry signal, so make it "now" explicitly
        os.utime(path)
        logger.debug(f"Cached {len(data)} bytes at {path}")

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "CacheStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
