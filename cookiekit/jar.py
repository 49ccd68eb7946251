from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, AnyStr, Dict, Iterable, Iterator, List, Optional, Tuple

from cookiekit.cookies import (
    Cookie,
    datetime_to_cookie_format,
    write_cookie_for_request,
    write_cookie_for_response,
)
from cookiekit.logs import get_logger
from cookiekit.parser import parse_cookie_header
from cookiekit.settings.json import json_settings

logger = get_logger()

EXPIRED_DATE = datetime_to_cookie_format(datetime(1970, 1, 1))


class CookieStatus(Enum):
    UNMODIFIED = "unmodified"
    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"


def expired_cookie(cookie: Cookie) -> Cookie:
    """
    Returns a cookie that instructs a client to delete the given cookie, keeping
    its Domain and Path so that it matches the cookie stored by the client.
    """
    return Cookie(
        cookie.name,
        "",
        domain=cookie.domain,
        path=cookie.path,
        max_age=0,
        expires=EXPIRED_DATE,
    )


@dataclass(frozen=True)
class CookieChange:
    name: str
    status: CookieStatus
    cookie: Cookie

    # Cookie is unhashable; equal changes always share name and status
    def __hash__(self):
        return hash((self.name, self.status))

    @property
    def header_value(self) -> str:
        if self.status is CookieStatus.REMOVED:
            return write_cookie_for_response(expired_cookie(self.cookie))
        return write_cookie_for_response(self.cookie)


class CookieJar:
    """
    An ordered collection of cookies, unique by name, that keeps track of the
    cookies added and removed since it was created.

    Cookies passed to the constructor, or read from a Cookie request header with
    `CookieJar.parse`, are considered known to the peer and are marked as
    unmodified. `add` and `remove` record changes, which can be emitted as
    Set-Cookie values with `delta_header_values`.

    A jar is not thread-safe: use one instance per request/response scope.
    """

    def __init__(self, cookies: Optional[Iterable[Cookie]] = None):
        self._cookies: Dict[str, Cookie] = {}
        self._status: Dict[str, CookieStatus] = {}
        self._removed: Dict[str, Cookie] = {}

        if cookies:
            for cookie in cookies:
                self._load(cookie)

    @classmethod
    def parse(cls, value: AnyStr) -> "CookieJar":
        """
        Creates a jar from the value of a Cookie request header. When the same name
        appears more than once, the first occurrence is kept.
        """
        return cls(parse_cookie_header(value))

    def _load(self, cookie: Cookie) -> None:
        if cookie.name in self._cookies:
            logger.debug("Ignoring duplicate cookie: %s", cookie.name)
            return
        self._cookies[cookie.name] = cookie
        self._status[cookie.name] = CookieStatus.UNMODIFIED

    def add(self, cookie: Cookie) -> None:
        """
        Adds a cookie to the jar, replacing any cookie with the same name.
        A replaced cookie keeps its position; a new one is appended.
        """
        name = cookie.name
        if name in self._cookies:
            if self._status[name] is not CookieStatus.ADDED:
                self._status[name] = CookieStatus.UPDATED
        elif self._removed.pop(name, None) is not None:
            self._status[name] = CookieStatus.UPDATED
        else:
            self._status[name] = CookieStatus.ADDED
        self._cookies[name] = cookie

    def get(self, name: str) -> Optional[Cookie]:
        return self._cookies.get(name)

    def remove(self, name: str) -> None:
        """
        Removes the cookie with the given name, if any. Removing a cookie that was
        known to the peer records the removal, to emit an expired Set-Cookie.
        """
        cookie = self._cookies.pop(name, None)
        if cookie is None:
            return
        status = self._status.pop(name)
        if status is not CookieStatus.ADDED:
            self._removed[name] = cookie

    def status(self, name: str) -> Optional[CookieStatus]:
        if name in self._status:
            return self._status[name]
        if name in self._removed:
            return CookieStatus.REMOVED
        return None

    def names(self) -> Tuple[str, ...]:
        return tuple(self._cookies.keys())

    def changes(self) -> List[CookieChange]:
        changes = [
            CookieChange(name, self._status[name], cookie)
            for name, cookie in self._cookies.items()
            if self._status[name] is not CookieStatus.UNMODIFIED
        ]
        changes.extend(
            CookieChange(name, CookieStatus.REMOVED, cookie)
            for name, cookie in self._removed.items()
        )
        return changes

    def as_header_values(self) -> List[str]:
        """Returns one Set-Cookie value for each cookie in the jar."""
        return [write_cookie_for_response(cookie) for cookie in self]

    def delta_header_values(self) -> List[str]:
        """Returns the Set-Cookie values describing the changes made to the jar."""
        return [change.header_value for change in self.changes()]

    def to_header(self) -> str:
        """Returns the value of a Cookie request header for the cookies in the jar."""
        return write_cookie_for_request(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cookies": [cookie.to_dict() for cookie in self],
            "changes": [
                {"name": change.name, "status": change.status.value}
                for change in self.changes()
            ],
        }

    def to_json(self, pretty: bool = False) -> str:
        if pretty:
            return json_settings.pretty_dumps(self.to_dict())
        return json_settings.dumps(self.to_dict())

    def __iter__(self) -> Iterator[Cookie]:
        yield from self._cookies.values()

    def __len__(self) -> int:
        return len(self._cookies)

    def __contains__(self, name: str) -> bool:
        return name in self._cookies

    def __repr__(self):
        return f"<CookieJar {list(self._cookies.keys())}>"
