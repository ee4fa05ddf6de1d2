from __future__ import annotations

from typing import (
    Any,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Union,
)

# Request fields, RFC 7232 Section 3 and RFC 7233 Section 3
IF_MATCH = "If-Match"
IF_UNMODIFIED_SINCE = "If-Unmodified-Since"
IF_NONE_MATCH = "If-None-Match"
IF_MODIFIED_SINCE = "If-Modified-Since"
IF_RANGE = "If-Range"
RANGE = "Range"

WILDCARD = "*"


def strip_ows(text: str) -> str:
    return text.strip(" \t")


def parse_entity_tags(value: str) -> List[str]:
    """
    Split an If-Match or If-None-Match field value into its members.

    Per RFC 7232 Section 3.1:
    If-Match = "*" / 1#entity-tag
    entity-tag = [ weak ] opaque-tag
    opaque-tag = DQUOTE *etagc DQUOTE

    Commas inside an opaque-tag do not separate members. Empty list elements
    are skipped. Members are returned verbatim, including the quotes and any
    W/ prefix, so they can be compared to the resource's entity tag as
    opaque strings.

    Args:
        value: The raw header field value

    Returns:
        The list of entity-tags in the order they appeared

    Examples:
        >>> parse_entity_tags('"abc"')
        ['"abc"']
        >>> parse_entity_tags('"a", W/"b" ,, "c,d"')
        ['"a"', 'W/"b"', '"c,d"']
        >>> parse_entity_tags(' * ')
        ['*']
    """
    members: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in value:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            member = strip_ows("".join(current))
            if member:
                members.append(member)
            current = []
            continue
        current.append(char)

    member = strip_ows("".join(current))
    if member:
        members.append(member)
    return members


def is_wildcard(entity_tags: List[str]) -> bool:
    return entity_tags == [WILDCARD]


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive header mapping.

    Repeated fields are kept as a list and joined with ", " on access,
    which is the combined field value defined by RFC 7230 Section 3.2.2.
    """

    def __init__(self, headers: Mapping[str, Union[str, List[str]]]) -> None:
        self._headers = {k.lower(): ([v] if isinstance(v, str) else v[:]) for k, v in headers.items()}

    def get_list(self, key: str) -> Optional[List[str]]:
        return self._headers.get(key.lower(), None)

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __setitem__(self, key: str, value: str) -> None:
        self._headers.setdefault(key.lower(), []).append(value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return repr(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers
