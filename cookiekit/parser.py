"""
This module implements parsing of cookies from header values.

Two grammars are supported:

- the value of a Set-Cookie header, describing a single cookie with attributes:
  `Name=Value; Domain=example.com; Path=/; Secure; HttpOnly; SameSite=Lax`
- the value of a Cookie request header, listing only name/value pairs:
  `name1=value1; name2=value2`
"""

import re
from typing import Any, AnyStr, Dict, List, Optional, Tuple

from cookiekit.cookies import Cookie, SameSite, validate_cookie_name
from cookiekit.exceptions import (
    EmptyName,
    InvalidMaxAgeValue,
    MissingAttributeValue,
    MissingEquals,
    UndecodableValue,
    UnknownAttribute,
)
from cookiekit.logs import get_logger
from cookiekit.settings.parsing import parsing_settings
from cookiekit.utils import ensure_str

logger = get_logger()

_MAX_AGE_RX = re.compile(r"^-?\d+$")


def split_value(raw_value: str, separator: str = "=") -> Tuple[str, Optional[str]]:
    """
    Splits the given value on the first occurrence of the separator, trimming
    both parts. The second item is None if the separator is not found, which is
    the case of flags like `Secure` and `HttpOnly`.
    """
    name, found, value = raw_value.partition(separator)
    if not found:
        return name.strip(), None
    return name.strip(), value.strip()


def decode_header_value(value: AnyStr) -> str:
    try:
        return ensure_str(value)
    except UnicodeDecodeError as decode_error:
        raise UndecodableValue(
            value.decode("utf8", errors="backslashreplace"), decode_error
        )


def unquote_value(value: str) -> str:
    if len(value) > 1 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value


def parse_pair(segment: str) -> Tuple[str, str]:
    name, value = split_value(segment)
    if value is None:
        raise MissingEquals(segment)
    if not name:
        raise EmptyName(segment)
    return validate_cookie_name(name), unquote_value(value)


def _require_value(segment: str, attribute: str, value: Optional[str]) -> str:
    if value is None:
        raise MissingAttributeValue(segment, attribute)
    return value


def _parse_max_age(value: str) -> int:
    if not _MAX_AGE_RX.match(value):
        raise InvalidMaxAgeValue(value)
    return int(value)


def parse_cookie(value: AnyStr, strict: Optional[bool] = None) -> Cookie:
    """
    Parses a single cookie from the value of a Set-Cookie header.

    Attribute names are matched ignoring case. Unknown attributes are ignored,
    unless strict parsing is enabled (by argument or through `parsing_settings`),
    in which case they cause an UnknownAttribute error. Any error aborts the
    whole parse.
    """
    if strict is None:
        strict = parsing_settings.strict

    segments = decode_header_value(value).split(";")
    name, cookie_value = parse_pair(segments[0].strip())
    options: Dict[str, Any] = {}

    for segment in segments[1:]:
        segment = segment.strip()
        if not segment:
            continue

        key, attribute_value = split_value(segment)
        lower_key = key.lower()

        if lower_key == "domain":
            options["domain"] = _require_value(segment, "Domain", attribute_value)
        elif lower_key == "path":
            options["path"] = _require_value(segment, "Path", attribute_value)
        elif lower_key == "secure":
            options["secure"] = True
        elif lower_key == "httponly":
            options["http_only"] = True
        elif lower_key == "partitioned":
            options["partitioned"] = True
        elif lower_key == "samesite":
            options["same_site"] = SameSite.parse(
                _require_value(segment, "SameSite", attribute_value)
            )
        elif lower_key == "max-age":
            options["max_age"] = _parse_max_age(
                _require_value(segment, "Max-Age", attribute_value)
            )
        elif lower_key == "expires":
            options["expires"] = _require_value(segment, "Expires", attribute_value)
        elif strict:
            raise UnknownAttribute(segment)
        else:
            logger.debug("Ignoring unknown attribute of cookie %s: %s", name, segment)

    return Cookie(name, cookie_value, **options)


def parse_cookie_header(value: AnyStr) -> List[Cookie]:
    """
    Parses the value of a Cookie request header into a list of cookies, in the
    order they appear. Empty segments are skipped; the first malformed segment
    aborts the whole parse.
    """
    cookies = []
    for segment in decode_header_value(value).split(";"):
        segment = segment.strip()
        if not segment:
            continue
        name, cookie_value = parse_pair(segment)
        cookies.append(Cookie(name, cookie_value))
    return cookies
