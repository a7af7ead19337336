"""yumreader: YUM repository metadata reader."""

import logging

from rich.logging import RichHandler

from yumreader.constants import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logging.getLogger("httpx").setLevel(logging.WARNING)

from yumreader.errors import (  # noqa: E402
    ManifestUnavailableError,
    MetadataParseError,
    RetrievalError,
    RoleNotFoundError,
    YumReaderError,
)
from yumreader.fetcher import CacheStore, cache_namespace, normalize_repo_url  # noqa: E402
from yumreader.models import ChangelogEntry, ChangelogRecord, FileListRecord, PackageRecord  # noqa: E402
from yumreader.repomd import Manifest, Repomd, RepomdData  # noqa: E402
from yumreader.repository import PackageChangelogList, PackageFileList, PackageList  # noqa: E402
from yumreader.settings import Settings  # noqa: E402

__version__ = "0.2.0"

__all__ = [
    "CacheStore",
    "ChangelogEntry",
    "ChangelogRecord",
    "FileListRecord",
    "Manifest",
    "ManifestUnavailableError",
    "MetadataParseError",
    "PackageChangelogList",
    "PackageFileList",
    "PackageList",
    "PackageRecord",
    "Repomd",
    "RepomdData",
    "RetrievalError",
    "RoleNotFoundError",
    "Settings",
    "YumReaderError",
    "cache_namespace",
    "normalize_repo_url",
]
