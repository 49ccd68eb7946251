"""
Root module of the library. This module re-exports the most commonly used types to
reduce the verbosity of the imports statements.
"""

__version__ = "1.0.0"

from .cookies import Cookie as Cookie
from .cookies import CookieBuilder as CookieBuilder
from .cookies import SameSite as SameSite
from .cookies import datetime_from_cookie_format as datetime_from_cookie_format
from .cookies import datetime_to_cookie_format as datetime_to_cookie_format
from .cookies import write_cookie_for_request as write_cookie_for_request
from .cookies import write_cookie_for_response as write_cookie_for_response
from .exceptions import CookieError as CookieError
from .exceptions import ParseError as ParseError
from .jar import CookieChange as CookieChange
from .jar import CookieJar as CookieJar
from .jar import CookieStatus as CookieStatus
from .parser import parse_cookie as parse_cookie
from .parser import parse_cookie_header as parse_cookie_header
