import logging
from functools import cached_property

from lxml import etree

from yumreader.constants import NAMESPACES, XML_PARSER_OPTIONS

logger = logging.getLogger(__name__)

_PARSER = etree.XMLParser(**XML_PARSER_OPTIONS)


class Record:
    """Lazy view over the markup of a single ``<package>`` element.

    The fragment is parsed on first field access, and each field is computed
    once and kept. Missing elements or attributes come back as ``""`` (or an
    empty list), never as an error.
    """

    namespaces: dict[str, str] = NAMESPACES

    def __init__(self, fragment: bytes):
        self.fragment = fragment

    @cached_property
    def doc(self) -> etree._Element | None:
        try:
            return etree.fromstring(self.fragment, _PARSER)
        except etree.XMLSyntaxError as e:
            logger.warning(f"Unparseable record fragment, treating as empty: {e}")
            return None

    def _text(self, path: str) -> str:
        if self.doc is None:
            return ""
        return str(self.doc.xpath(f"string({path})", namespaces=self.namespaces))

    def _strings(self, path: str) -> list[str]:
        if self.doc is None:
            return []
        return [str(value) for value in self.doc.xpath(path, namespaces=self.namespaces)]

    def __repr__(self) -> str:
        name = getattr(self, "name", "")
        return f"<{type(self).__name__} {name!r}>"
