"""Named string formats recognized by the ``format`` rule."""

from __future__ import annotations

import re
from typing import Final

_IPV4_OCTET = r"(25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"
_IPV4_TAIL = rf"({_IPV4_OCTET}(\.{_IPV4_OCTET}){{3}})"
_H16 = r"[0-9A-Fa-f]{1,4}"

_HOSTNAME = (
    r"(?=.{1,255}$)[0-9A-Za-z](?:(?:[0-9A-Za-z]|\b-){0,61}[0-9A-Za-z])?"
    r"(?:\.[0-9A-Za-z](?:(?:[0-9A-Za-z]|\b-){0,61}[0-9A-Za-z])?)*\.?"
)

_IPV6 = "|".join(
    [
        rf"(({_H16}:){{7}}({_H16}|:))",
        rf"(({_H16}:){{6}}(:{_H16}|{_IPV4_TAIL}|:))",
        rf"(({_H16}:){{5}}(((:{_H16}){{1,2}})|:{_IPV4_TAIL}|:))",
        rf"(({_H16}:){{4}}(((:{_H16}){{1,3}})|((:{_H16})?:{_IPV4_TAIL})|:))",
        rf"(({_H16}:){{3}}(((:{_H16}){{1,4}})|((:{_H16}){{0,2}}:{_IPV4_TAIL})|:))",
        rf"(({_H16}:){{2}}(((:{_H16}){{1,5}})|((:{_H16}){{0,3}}:{_IPV4_TAIL})|:))",
        rf"(({_H16}:){{1}}(((:{_H16}){{1,6}})|((:{_H16}){{0,4}}:{_IPV4_TAIL})|:))",
        rf"(:(((:{_H16}){{1,7}})|((:{_H16}){{0,5}}:{_IPV4_TAIL})|:))",
    ]
)

FORMAT_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    "date-time": re.compile(
        r"^([0-9]+)-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])[Tt]"
        r"([01][0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9]|60)(\.[0-9]+)?"
        r"(([Zz])|([+\-]([01][0-9]|2[0-3]):[0-5][0-9]))$"
    ),
    "hostname": re.compile(_HOSTNAME),
    "ipv4": re.compile(r"^((25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"),
    "ipv6": re.compile(_IPV6),
    "uri": re.compile(
        r"^((([A-Za-z]{3,9}:(?://)?)(?:[\-;:&=+$,\w]+@)?[A-Za-z0-9.\-]+"
        r"|(?:www\.|[\-;:&=+$,\w]+@)[A-Za-z0-9.\-]+)"
        r"((?:/[+~%/.\w\-_]*)?\??(?:[\-+=&;%@.\w_]*)#?(?:[.!/\\\w]*))?)$"
    ),
    "color": re.compile(r"^#[A-Fa-f0-9]{6}$"),
}
FORMAT_PATTERNS["url"] = FORMAT_PATTERNS["uri"]

EMAIL_LOCAL_PART: Final = re.compile(
    r"^(?:[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r'|"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])*")$',
    re.IGNORECASE,
)
EMAIL_DOMAIN: Final = re.compile(_HOSTNAME)

# Legacy ``email`` rule pattern (single expression, whole address).
LEGACY_EMAIL: Final = re.compile(
    r"^(?=.{1,254}$)(?=.{1,64}@)[-!#$%&'*+/0-9=?A-Z^_`a-z{|}~]+(\.[-!#$%&'*+/0-9=?A-Z^_`a-z{|}~]+)*"
    r"@[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?(\.[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)

KNOWN_FORMATS: Final = frozenset({*FORMAT_PATTERNS, "email"})


def matches_format(value: str, name: str) -> bool | None:
    """Test *value* against the named format.

    Returns ``None`` when *name* is not a recognized format.
    """
    if name == "email":
        parts = value.split("@")
        return (
            len(parts) == 2
            and EMAIL_LOCAL_PART.search(parts[0]) is not None
            and EMAIL_DOMAIN.search(parts[1]) is not None
        )
    pattern = FORMAT_PATTERNS.get(name)
    if pattern is None:
        return None
    return pattern.search(value) is not None
