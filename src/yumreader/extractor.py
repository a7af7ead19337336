"""Streaming extraction of record fragments from repository metadata documents."""

import logging
from collections.abc import Iterator
from typing import BinaryIO

from lxml import etree

from yumreader.constants import XML_PARSER_OPTIONS
from yumreader.errors import MetadataParseError

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def iter_record_fragments(source: BinaryIO, record_tag: str = "package") -> Iterator[bytes]:
    """Stream the serialized markup of every top-level record element in a document.

    The document is walked once, front to back. Only the outermost element named
    ``record_tag`` is emitted; elements of the same name nested inside it belong
    to its fragment and are not emitted again. Finished records are cleared from
    the partial tree, so memory use is bounded by the largest record rather than
    by the document.

    Fragments keep their namespace declarations, so each one parses on its own.

    Args:
        source: Binary stream of decompressed XML
        record_tag: Local name of the record element (namespace is ignored)

    Yields:
        One fragment per record, in document order

    Raises:
        MetadataParseError: If the markup is malformed
    """
    depth = 0
    count = 0
    try:
        for event, elem in etree.iterparse(source, events=("start", "end"), **XML_PARSER_OPTIONS):
            if _local_name(elem.tag) != record_tag:
                continue
            if event == "start":
                depth += 1
                continue

            depth -= 1
            if depth:
                continue

            yield etree.tostring(elem, with_tail=False)
            count += 1

            elem.clear(keep_tail=True)
            parent = elem.getparent()
            if parent is not None:
                while elem.getprevious() is not None:
                    del parent[0]
    except etree.XMLSyntaxError as e:
        raise MetadataParseError(f"Malformed metadata document after {count} records: {e}") from e

    logger.debug(f"Extracted {count} <{record_tag}> records")
