from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

from cookiekit.exceptions import (
    CookieValueExceedsMaximumLength,
    EmptyName,
    InvalidMaxAgeValue,
    InvalidNameCharacter,
    InvalidSameSiteValue,
    InvalidValueCharacter,
)
from cookiekit.settings.parsing import parsing_settings

# RFC 2616 separators, which are not allowed in a cookie name (token)
SEPARATORS = frozenset('()<>@,;:\\"/[]?={} \t')

# characters excluded from cookie-octet (RFC 6265), besides controls and space
VALUE_SEPARATORS = frozenset('",;\\')


class SameSite(Enum):
    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "SameSite":
        """
        Returns the SameSite mode matching the given value, ignoring case.
        Raises InvalidSameSiteValue for unrecognized values.
        """
        lower_value = value.strip().lower()
        for mode in cls:
            if mode.value.lower() == lower_value:
                return mode
        raise InvalidSameSiteValue(value)


def datetime_to_cookie_format(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%a, %d %b %Y %H:%M:%S GMT")


def datetime_from_cookie_format(value: str) -> datetime:
    return parsedate_to_datetime(value).replace(tzinfo=None)


def validate_cookie_name(name: str) -> str:
    if not name:
        raise EmptyName(name or "")
    for character in name:
        code = ord(character)
        if code < 33 or code > 126 or character in SEPARATORS:
            raise InvalidNameCharacter(name, character)
    return name


def validate_cookie_value(value: str) -> str:
    """
    Validates a cookie value against the cookie-octet grammar of RFC 6265, allowing
    inner spaces. Surrounding double quotes are not part of the value: the parser
    strips them, and the formatter never adds them.
    """
    for character in value:
        code = ord(character)
        if code < 32 or code == 127 or character in VALUE_SEPARATORS:
            raise InvalidValueCharacter(value, character)
    if value != value.strip():
        raise InvalidValueCharacter(value, " ")
    max_length = parsing_settings.max_value_length
    if len(value.encode()) > max_length:
        raise CookieValueExceedsMaximumLength(max_length)
    return value


def validate_attribute_value(attribute: str, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    for character in value:
        code = ord(character)
        if code < 32 or code == 127 or character == ";":
            raise InvalidValueCharacter(value, character, attribute)
    if value != value.strip():
        raise InvalidValueCharacter(value, " ", attribute)
    return value


class Cookie:
    """
    An HTTP cookie: a name/value pair with optional attributes.

    Optional attributes are None when absent. Boolean flags are tri-state:
    `secure=False` and `secure=None` both produce no `Secure` attribute on
    output, but only None means the attribute was never set.

    The name is read-only, since a CookieJar stores cookies by name. Values and
    attributes are validated when set, so that a cookie can always be written to
    a header and parsed back unchanged.
    """

    def __init__(
        self,
        name: str,
        value: str,
        *,
        domain: Optional[str] = None,
        path: Optional[str] = None,
        secure: Optional[bool] = None,
        http_only: Optional[bool] = None,
        same_site: Optional[SameSite] = None,
        max_age: Union[int, timedelta, None] = None,
        expires: Union[str, datetime, None] = None,
        partitioned: Optional[bool] = None,
    ):
        self._name = validate_cookie_name(name)
        self.value = value
        self.domain = domain
        self.path = path
        self.secure = secure
        self.http_only = http_only
        self.same_site = same_site
        self.max_age = max_age
        self.expires = expires
        self.partitioned = partitioned

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str):
        self._value = validate_cookie_value(value)

    @property
    def domain(self) -> Optional[str]:
        return self._domain

    @domain.setter
    def domain(self, value: Optional[str]):
        self._domain = validate_attribute_value("Domain", value)

    @property
    def path(self) -> Optional[str]:
        return self._path

    @path.setter
    def path(self, value: Optional[str]):
        self._path = validate_attribute_value("Path", value)

    @property
    def max_age(self) -> Optional[int]:
        return self._max_age

    @max_age.setter
    def max_age(self, value: Union[int, timedelta, None]):
        if isinstance(value, timedelta):
            value = int(value.total_seconds())
        elif value is not None and (
            isinstance(value, bool) or not isinstance(value, int)
        ):
            raise InvalidMaxAgeValue(str(value))
        self._max_age = value

    @property
    def expires(self) -> Optional[str]:
        return self._expires

    @expires.setter
    def expires(self, value: Union[str, datetime, None]):
        if isinstance(value, datetime):
            value = datetime_to_cookie_format(value)
        self._expires = validate_attribute_value("Expires", value)

    @property
    def expires_datetime(self) -> Optional[datetime]:
        if self._expires is None:
            return None
        return datetime_from_cookie_format(self._expires)

    @classmethod
    def builder(cls, name: str, value: str) -> "CookieBuilder":
        return CookieBuilder(name, value)

    @classmethod
    def parse(cls, value: Union[str, bytes], strict: Optional[bool] = None) -> "Cookie":
        from cookiekit.parser import parse_cookie

        return parse_cookie(value, strict)

    def clone(self) -> "Cookie":
        return Cookie(
            self.name,
            self.value,
            domain=self.domain,
            path=self.path,
            secure=self.secure,
            http_only=self.http_only,
            same_site=self.same_site,
            max_age=self.max_age,
            expires=self.expires,
            partitioned=self.partitioned,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "secure": self.secure,
            "http_only": self.http_only,
            "same_site": self.same_site.value if self.same_site else None,
            "max_age": self.max_age,
            "expires": self.expires,
            "partitioned": self.partitioned,
        }

    def __eq__(self, other):
        if not isinstance(other, Cookie):
            return NotImplemented
        return (
            _equal_ignore_case(self.domain, other.domain)
            and _equal_ignore_case(self.path, other.path)
            and self.name == other.name
            and self.value == other.value
            and self.secure == other.secure
            and self.http_only == other.http_only
            and self.same_site == other.same_site
            and self.max_age == other.max_age
            and self.expires == other.expires
            and self.partitioned == other.partitioned
        )

    __hash__ = None

    def __str__(self):
        return write_cookie_for_response(self)

    def __repr__(self):
        return f"<Cookie {self.name}: {self.value}>"


def _equal_ignore_case(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return a is b
    return a.lower() == b.lower()


class CookieBuilder:
    """
    Accumulates the attributes of a cookie through chained calls; `build` creates
    the cookie, validating it like the Cookie constructor does.

        cookie = (
            Cookie.builder("session", "abc123")
            .domain("example.com")
            .path("/")
            .secure()
            .http_only()
            .same_site(SameSite.LAX)
            .build()
        )
    """

    def __init__(self, name: str, value: str):
        self._name = name
        self._value = value
        self._options: Dict[str, Any] = {}

    def domain(self, domain: str) -> "CookieBuilder":
        self._options["domain"] = domain
        return self

    def path(self, path: str) -> "CookieBuilder":
        self._options["path"] = path
        return self

    def secure(self, secure: bool = True) -> "CookieBuilder":
        self._options["secure"] = secure
        return self

    def http_only(self, http_only: bool = True) -> "CookieBuilder":
        self._options["http_only"] = http_only
        return self

    def same_site(self, same_site: SameSite) -> "CookieBuilder":
        self._options["same_site"] = same_site
        return self

    def max_age(self, max_age: Union[int, timedelta]) -> "CookieBuilder":
        self._options["max_age"] = max_age
        return self

    def expires(self, expires: Union[str, datetime]) -> "CookieBuilder":
        self._options["expires"] = expires
        return self

    def partitioned(self, partitioned: bool = True) -> "CookieBuilder":
        self._options["partitioned"] = partitioned
        return self

    def build(self) -> Cookie:
        return Cookie(self._name, self._value, **self._options)


def write_cookie_for_response(cookie: Cookie) -> str:
    """
    Returns the value of a Set-Cookie header for the given cookie. Attributes are
    written in a fixed order; flags are written only when set to True.
    """
    parts = [cookie.name + "=" + cookie.value]
    if cookie.domain is not None:
        parts.append("Domain=" + cookie.domain)
    if cookie.path is not None:
        parts.append("Path=" + cookie.path)
    if cookie.secure:
        parts.append("Secure")
    if cookie.http_only:
        parts.append("HttpOnly")
    if cookie.same_site is not None:
        parts.append("SameSite=" + cookie.same_site.value)
    if cookie.max_age is not None:
        parts.append("Max-Age=" + str(cookie.max_age))
    if cookie.expires is not None:
        parts.append("Expires=" + cookie.expires)
    if cookie.partitioned:
        parts.append("Partitioned")
    return "; ".join(parts)


def write_cookie_for_request(cookies: Iterable[Cookie]) -> str:
    """Returns the value of a Cookie request header: name/value pairs only."""
    return "; ".join(cookie.name + "=" + cookie.value for cookie in cookies)
