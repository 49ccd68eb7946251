class CookieError(Exception):
    def __init__(self, message: str):
        super().__init__(message)


class CookieValueExceedsMaximumLength(CookieError):
    def __init__(self, max_length: int = 4096):
        super().__init__(
            "The length of the cookie value exceeds the maximum "
            f"length of {max_length} bytes, and it would be ignored or truncated "
            "by clients. See: https://tools.ietf.org/html/rfc6265#section-6.1"
        )
        self.max_length = max_length


class ParseError(CookieError):
    """
    Base class for errors raised when a cookie string, or a cookie name, does not
    respect the expected grammar. The `segment` attribute holds the offending text.
    """

    def __init__(self, message: str, segment: str):
        super().__init__(message)
        self.segment = segment


class MissingEquals(ParseError):
    def __init__(self, segment: str):
        super().__init__(
            f"Invalid name=value fragment: '{segment}'. "
            "Expected a cookie pair in the form Name=Value.",
            segment,
        )


class EmptyName(ParseError):
    def __init__(self, segment: str = ""):
        super().__init__(
            f"A cookie name is required, got an empty name in: '{segment}'.",
            segment,
        )


class InvalidNameCharacter(ParseError):
    def __init__(self, segment: str, character: str):
        super().__init__(
            f"Invalid cookie name: '{segment}'. Character {character!r} is not "
            "allowed; a cookie name must be a token without control characters, "
            "whitespace, or separators.",
            segment,
        )
        self.character = character


class InvalidSameSiteValue(ParseError):
    def __init__(self, segment: str):
        super().__init__(
            f"Invalid SameSite value: '{segment}'. "
            "Expected one of: Strict, Lax, None.",
            segment,
        )


class InvalidMaxAgeValue(ParseError):
    def __init__(self, segment: str):
        super().__init__(
            f"Invalid Max-Age value: '{segment}'. Expected an integer "
            "number of seconds.",
            segment,
        )


class MissingAttributeValue(ParseError):
    def __init__(self, segment: str, attribute: str):
        super().__init__(
            f"Missing value for attribute '{attribute}' in: '{segment}'. "
            f"Expected {attribute}=Value.",
            segment,
        )
        self.attribute = attribute


class UnknownAttribute(ParseError):
    def __init__(self, segment: str):
        super().__init__(
            f"Unknown cookie attribute: '{segment}'.",
            segment,
        )


class InvalidValueCharacter(ParseError):
    def __init__(self, segment: str, character: str, attribute: str = ""):
        target = f"{attribute} value" if attribute else "cookie value"
        super().__init__(
            f"Invalid {target}: '{segment}'. Character {character!r} is not "
            "allowed; control characters, semicolons, and leading or trailing "
            "whitespace are never allowed, a cookie value also cannot contain "
            "double quotes, commas, or backslashes.",
            segment,
        )
        self.character = character
        self.attribute = attribute


class UndecodableValue(ParseError):
    def __init__(self, segment: str, decode_error: UnicodeDecodeError):
        super().__init__(
            f"Cannot decode cookie header value: '{segment}'. "
            f"Expected UTF-8 text ({decode_error.reason} at position "
            f"{decode_error.start}).",
            segment,
        )
        self.decode_error = decode_error
