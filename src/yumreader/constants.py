from os import getenv
from pathlib import Path

# cache root; created on demand by the cache store, not at import time
CACHE_DIR = Path(getenv("YUMREADER_CACHE_DIR", Path.home() / ".cache" / "yumreader")).expanduser()

# seconds before a cached metadata file is considered stale
CACHE_EXPIRE = int(getenv("YUMREADER_CACHE_EXPIRE", "3600"))
CACHE_ENABLED = getenv("YUMREADER_CACHE_ENABLED", "1").lower() not in {"0", "false", "no", "off"}

HTTP_TIMEOUT = float(getenv("YUMREADER_TIMEOUT", "30"))
LOG_LEVEL = getenv("YUMREADER_LOG_LEVEL", "INFO").upper()

REPODATA_DIR = "repodata"
MANIFEST_FILENAME = "repomd.xml"

# one parser policy for whole documents and single records: no size caps, no entity expansion
XML_PARSER_OPTIONS = {"huge_tree": True, "resolve_entities": False}

# fmt: off
NAMESPACES = {
    "repo": "http://linux.duke.edu/metadata/repo",
    "common": "http://linux.duke.edu/metadata/common",
    "rpm": "http://linux.duke.edu/metadata/rpm",
    "other": "http://linux.duke.edu/metadata/other",
    "filelists": "http://linux.duke.edu/metadata/filelists",
}
# fmt: on
