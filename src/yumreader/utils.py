import bz2
import datetime
import gzip
import logging
import lzma
import time
import zlib
from collections.abc import Iterator
from contextlib import contextmanager

from dateutil.parser import parse as parse_date

from yumreader.errors import MetadataParseError

logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"
_XZ_MAGIC = b"\xfd7zXZ\x00"
_BZ2_MAGIC = b"BZh"
_ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def try_parse_date(date_str: str | None) -> datetime.datetime | None:
    """Try to parse a date string into a timestamp.

    Metadata dates are usually epoch seconds, but some generators write
    formatted dates instead, so both are accepted.

    Args:
        date_str: Epoch seconds or a date string

    Returns:
        A timezone-aware datetime, or None if parsing failed or date_str is empty
    """
    if not date_str:
        return None
    try:
        return datetime.datetime.fromtimestamp(int(date_str), tz=datetime.UTC)
    except (ValueError, OverflowError, OSError):
        pass

    try:
        parsed = parse_date(date_str)
    except Exception as e:
        logger.debug(f"Failed to parse date '{date_str}': {e}")
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=datetime.UTC)


@contextmanager
def log_duration(msg: str) -> Iterator[None]:
    """Log how long the wrapped block took, at debug level."""
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug(f"{msg} took {time.perf_counter() - start:.3f}s")


def decompress(data: bytes) -> bytes:
    """Decompress a metadata document, detecting the format from its magic bytes.

    gzip, xz and bzip2 are supported; anything else is returned unchanged and
    treated as plain XML.

    Raises:
        MetadataParseError: If the payload looks compressed but is corrupt, or is zstd
    """
    if data.startswith(_ZSTD_MAGIC):
        raise MetadataParseError("zstd-compressed metadata is not supported")
    try:
        if data.startswith(_GZIP_MAGIC):
            return gzip.decompress(data)
        if data.startswith(_XZ_MAGIC):
            return lzma.decompress(data)
        if data.startswith(_BZ2_MAGIC):
            return bz2.decompress(data)
    except (OSError, EOFError, lzma.LZMAError, zlib.error) as e:
        raise MetadataParseError(f"Failed to decompress metadata: {e}") from e
    logger.debug("Metadata is not compressed, reading as plain XML")
    return data
