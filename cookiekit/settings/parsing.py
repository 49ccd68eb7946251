import os

from cookiekit.utils import truthy

DEFAULT_MAX_VALUE_LENGTH = 4096


def get_max_value_length() -> int:
    value = os.environ.get("COOKIEKIT_MAX_VALUE_LENGTH")
    if not value:
        return DEFAULT_MAX_VALUE_LENGTH
    try:
        max_length = int(value)
    except ValueError:
        raise ValueError(
            f"Invalid COOKIEKIT_MAX_VALUE_LENGTH: '{value}'. Must be an integer."
        )
    if max_length < 1:
        raise ValueError(
            f"Invalid COOKIEKIT_MAX_VALUE_LENGTH: '{value}'. Must be positive."
        )
    return max_length


class ParsingSettings:
    """
    Configures how cookies are validated and parsed.

    Defaults are read from environment variables when the settings object is
    created:

    - `COOKIEKIT_STRICT_PARSING`: when truthy, unknown attributes in Set-Cookie
      strings cause an `UnknownAttribute` error instead of being ignored.
    - `COOKIEKIT_MAX_VALUE_LENGTH`: the maximum length in bytes of a cookie value
      (default 4096, see RFC 6265 section 6.1).

    Both can be replaced at runtime using the `use` method.
    """

    def __init__(self) -> None:
        self._strict = truthy(os.environ.get("COOKIEKIT_STRICT_PARSING", ""))
        self._max_value_length = get_max_value_length()

    def use(
        self,
        strict: bool = False,
        max_value_length: int = DEFAULT_MAX_VALUE_LENGTH,
    ) -> None:
        self._strict = strict
        self._max_value_length = max_value_length

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def max_value_length(self) -> int:
        return self._max_value_length


parsing_settings = ParsingSettings()
