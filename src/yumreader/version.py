"""Best-effort version extraction from changelog author lines.

Changelog entries conventionally end the author line with the version they
describe (``John Doe <j@x.com> - 2.3.4-1``), but nothing enforces it, so the
result is a guess. Two patterns are tried in order:

1. standard: the last token of the line, after an optional ``-``, ``v`` or
   ``epoch:`` marker: a digit-led run of one or more dot-separated segments,
   optionally followed by ``-release``
2. odd: a token of letters, digits and hyphens at the end of the line that
   ends in a short ``-suffix`` (e.g. ``git20110101-1``)
"""

import re

_STANDARD_VERSION = re.compile(r"(?:^|\s)(?:-|v|\d+:)?(\d+(?:\.[0-9A-Za-z_]+)*(?:-[0-9A-Za-z_.~^+]+)?)\s*$")
_ODD_VERSION = re.compile(r"(?:^|\s)([0-9A-Za-z][0-9A-Za-z-]*-[0-9A-Za-z]{1,8})\s*$")
_BULLET = re.compile(r"^\s*[-*]\s*")


def extract_version(text: str | None) -> str | None:
    """Guess the version named in a changelog author line.

    Args:
        text: The author field of a changelog entry

    Returns:
        The version string, or None if neither pattern matches

    Examples:
        >>> extract_version("John Doe <j@x.com> - 2.3.4-1")
        '2.3.4-1'
        >>> extract_version("Jane Roe <jr@x.com> - git20110101-2")
        'git20110101-2'
    """
    if not text:
        return None

    # the version trails the author; anchoring to the end keeps e-mail digits out
    if match := _STANDARD_VERSION.search(text):
        return match.group(1)

    if match := _ODD_VERSION.search(text):
        return match.group(1)
    return None


def strip_bullet(text: str | None) -> str:
    """Remove a leading ``-`` or ``*`` list bullet and surrounding whitespace."""
    if not text:
        return ""
    return _BULLET.sub("", text, count=1).strip()
