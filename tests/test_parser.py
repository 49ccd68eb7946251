import logging

import pytest

from cookiekit import Cookie, SameSite, parse_cookie, parse_cookie_header
from cookiekit.exceptions import (
    CookieError,
    EmptyName,
    InvalidMaxAgeValue,
    InvalidNameCharacter,
    InvalidSameSiteValue,
    InvalidValueCharacter,
    MissingAttributeValue,
    MissingEquals,
    ParseError,
    UndecodableValue,
    UnknownAttribute,
)
from cookiekit.parser import split_value, unquote_value


@pytest.mark.parametrize(
    "value,expected_result",
    [
        ("name=value", ("name", "value")),
        (" name = value ", ("name", "value")),
        ("name=", ("name", "")),
        ("name=a=b", ("name", "a=b")),
        ("Secure", ("Secure", None)),
        (" HttpOnly ", ("HttpOnly", None)),
    ],
)
def test_split_value(value, expected_result):
    assert split_value(value) == expected_result


@pytest.mark.parametrize(
    "value,expected_result",
    [
        ('"abc"', "abc"),
        ('""', ""),
        ('"', '"'),
        ('"abc', '"abc'),
        ("abc", "abc"),
    ],
)
def test_unquote_value(value, expected_result):
    assert unquote_value(value) == expected_result


def test_parse_simple_cookie():
    assert parse_cookie("name=value") == Cookie("name", "value")


def test_parse_empty_value():
    assert parse_cookie("key=") == Cookie("key", "")


def test_parse_flags():
    cookie = Cookie.parse("session=abc123; Secure; HttpOnly")

    assert cookie.name == "session"
    assert cookie.value == "abc123"
    assert cookie.secure is True
    assert cookie.http_only is True
    assert cookie.domain is None


def test_absent_flags_are_none():
    cookie = parse_cookie("n=v")

    assert cookie.secure is None
    assert cookie.http_only is None
    assert cookie.partitioned is None


def test_parse_bytes():
    cookie = parse_cookie(b"n=v; Path=/")

    assert cookie == Cookie("n", "v", path="/")


@pytest.mark.parametrize(
    "value,expected_cookie",
    [
        (
            "name=value; Domain=example.com",
            Cookie.builder("name", "value").domain("example.com").build(),
        ),
        (
            "name=value; Path=/path/to/resource",
            Cookie.builder("name", "value").path("/path/to/resource").build(),
        ),
        (
            "name=value; Max-Age=3600",
            Cookie.builder("name", "value").max_age(3600).build(),
        ),
        (
            "name=value; Max-Age=-1",
            Cookie.builder("name", "value").max_age(-1).build(),
        ),
        (
            "name=value; SameSite=Strict",
            Cookie.builder("name", "value").same_site(SameSite.STRICT).build(),
        ),
        (
            "name=value; Expires=Wed, 21 Oct 2025 07:28:00 GMT",
            Cookie.builder("name", "value")
            .expires("Wed, 21 Oct 2025 07:28:00 GMT")
            .build(),
        ),
        (
            "name=value; Partitioned",
            Cookie.builder("name", "value").partitioned().build(),
        ),
        (
            "name=value; Path=",
            Cookie.builder("name", "value").path("").build(),
        ),
        (
            "name=value; secure; httponly; samesite=lax; DOMAIN=example.com",
            Cookie.builder("name", "value")
            .secure()
            .http_only()
            .same_site(SameSite.LAX)
            .domain("example.com")
            .build(),
        ),
        (
            " name = value ; Domain = example.com ; Path = / ; Secure ; HttpOnly ",
            Cookie.builder("name", "value")
            .domain("example.com")
            .path("/")
            .secure()
            .http_only()
            .build(),
        ),
        (
            "name=value;Path=/;HttpOnly;Domain=example.com",
            Cookie.builder("name", "value")
            .path("/")
            .http_only()
            .domain("example.com")
            .build(),
        ),
        (
            "name=value; Secure=yes",
            Cookie.builder("name", "value").secure().build(),
        ),
        (
            "name=value; Path=/;",
            Cookie.builder("name", "value").path("/").build(),
        ),
        (
            'name="quoted value"; Path=/',
            Cookie.builder("name", "quoted value").path("/").build(),
        ),
    ],
)
def test_parse_cookie_attributes(value, expected_cookie):
    assert parse_cookie(value) == expected_cookie


@pytest.mark.parametrize(
    "value,expected_name,expected_value,expected_path",
    [
        (
            "ARRAffinity=c12038089a7sdlkj1237192873; Path=/; HttpOnly; "
            "Domain=example.scm.azurewebsites.net",
            "ARRAffinity",
            "c12038089a7sdlkj1237192873",
            "/",
        ),
        (
            "1P_JAR=2020-08-23-11; expires=Tue, 22-Sep-2020 11:13:40 GMT; path=/; "
            "domain=.google.com; Secure",
            "1P_JAR",
            "2020-08-23-11",
            "/",
        ),
        (
            "session=gAAAAABgVeIWAXQ5iCbIgXThcx9IFORha534yIqw2ZjnqiTKIw7xBcnk-Tc8pv"
            "uTpLEuFSv3NRJkr83WBdhc0dpjZrEGBUNCFV8YK17hka43KanCxW5FMhrP00AxvGYyKZ2"
            "-vy4CEUIcsN92JAvV763u_ZCZzSpraw==",
            "session",
            "gAAAAABgVeIWAXQ5iCbIgXThcx9IFORha534yIqw2ZjnqiTKIw7xBcnk-Tc8pv"
            "uTpLEuFSv3NRJkr83WBdhc0dpjZrEGBUNCFV8YK17hka43KanCxW5FMhrP00AxvGYyKZ2"
            "-vy4CEUIcsN92JAvV763u_ZCZzSpraw==",
            None,
        ),
    ],
)
def test_parse_real_world_cookies(value, expected_name, expected_value, expected_path):
    cookie = parse_cookie(value)

    assert cookie.name == expected_name
    assert cookie.value == expected_value
    assert cookie.path == expected_path


def test_unknown_attributes_are_ignored(caplog):
    with caplog.at_level(logging.DEBUG, logger="cookiekit"):
        cookie = parse_cookie("n=v; Foo=Bar")

    assert cookie == Cookie("n", "v")
    assert "Foo=Bar" in caplog.text


def test_unknown_flag_is_ignored():
    assert parse_cookie("name=value; UnknownAttr") == Cookie("name", "value")


def test_unknown_attribute_strict():
    with pytest.raises(UnknownAttribute) as error_info:
        parse_cookie("name=value; UnknownAttr", strict=True)

    assert error_info.value.segment == "UnknownAttr"


def test_strict_parsing_from_settings(strict_parsing):
    with pytest.raises(UnknownAttribute):
        parse_cookie("name=value; Foo=Bar")

    assert parse_cookie("name=value; Foo=Bar", strict=False) == Cookie("name", "value")


def test_strict_parsing_accepts_known_attributes():
    cookie = parse_cookie(
        "name=value; Domain=example.com; Path=/; Secure; HttpOnly; SameSite=None",
        strict=True,
    )

    assert cookie == (
        Cookie.builder("name", "value")
        .domain("example.com")
        .path("/")
        .secure()
        .http_only()
        .same_site(SameSite.NONE)
        .build()
    )


@pytest.mark.parametrize(
    "value,expected_error,expected_segment",
    [
        ("", MissingEquals, ""),
        ("   ", MissingEquals, ""),
        ("namevalue", MissingEquals, "namevalue"),
        ("namevalue; Secure", MissingEquals, "namevalue"),
        ("=value", EmptyName, "=value"),
        (" = value; Path=/", EmptyName, "= value"),
        ("bad name=value", InvalidNameCharacter, "bad name"),
        ("n=v; SameSite=Sometimes", InvalidSameSiteValue, "Sometimes"),
        ("n=v; Max-Age=soon", InvalidMaxAgeValue, "soon"),
        ("n=v; Max-Age=1.5", InvalidMaxAgeValue, "1.5"),
        ("n=v; Domain", MissingAttributeValue, "Domain"),
        ("n=v; Path", MissingAttributeValue, "Path"),
        ("n=v; SameSite", MissingAttributeValue, "SameSite"),
        ("n=v; Max-Age", MissingAttributeValue, "Max-Age"),
        ("n=v; Expires", MissingAttributeValue, "Expires"),
    ],
)
def test_parse_cookie_errors(value, expected_error, expected_segment):
    with pytest.raises(expected_error) as error_info:
        parse_cookie(value)

    assert isinstance(error_info.value, ParseError)
    assert isinstance(error_info.value, CookieError)
    assert error_info.value.segment == expected_segment
    assert expected_segment in str(error_info.value)


def test_missing_attribute_value_names_attribute():
    with pytest.raises(MissingAttributeValue) as error_info:
        parse_cookie("n=v; samesite")

    assert error_info.value.attribute == "SameSite"


def test_parse_header():
    cookies = parse_cookie_header("name1=value1; name2=value2")

    assert cookies == [Cookie("name1", "value1"), Cookie("name2", "value2")]


def test_parse_header_does_not_read_attributes():
    cookies = parse_cookie_header("Path=/; Secure=1")

    assert [(cookie.name, cookie.value) for cookie in cookies] == [
        ("Path", "/"),
        ("Secure", "1"),
    ]
    assert all(cookie.path is None and cookie.secure is None for cookie in cookies)


@pytest.mark.parametrize(
    "value,expected_pairs",
    [
        ("", []),
        (" ", []),
        (";", []),
        ("a=1;b=2", [("a", "1"), ("b", "2")]),
        ("a=1; b=2;", [("a", "1"), ("b", "2")]),
        ("a=1;; b=", [("a", "1"), ("b", "")]),
        ('a="x y"; b=c=d', [("a", "x y"), ("b", "c=d")]),
        (b"a=1; b=2", [("a", "1"), ("b", "2")]),
    ],
)
def test_parse_header_values(value, expected_pairs):
    cookies = parse_cookie_header(value)

    assert [(cookie.name, cookie.value) for cookie in cookies] == expected_pairs


@pytest.mark.parametrize(
    "value,expected_error,expected_segment",
    [
        ("name1=value1; broken; name2=value2", MissingEquals, "broken"),
        ("name1=value1; =value2", EmptyName, "=value2"),
        ("a b=1", InvalidNameCharacter, "a b"),
    ],
)
def test_parse_header_aborts_on_first_error(value, expected_error, expected_segment):
    with pytest.raises(expected_error) as error_info:
        parse_cookie_header(value)

    assert error_info.value.segment == expected_segment


@pytest.mark.parametrize(
    "value",
    [b"n=\xff", b"n=v; Path=/\xfe"],
)
def test_parse_undecodable_bytes(value):
    with pytest.raises(UndecodableValue) as error_info:
        parse_cookie(value)

    assert isinstance(error_info.value, ParseError)
    assert isinstance(error_info.value.decode_error, UnicodeDecodeError)
    assert "\\x" in error_info.value.segment


def test_parse_header_undecodable_bytes():
    with pytest.raises(UndecodableValue) as error_info:
        parse_cookie_header(b"a=1; b=\xff")

    assert error_info.value.segment == "a=1; b=\\xff"


@pytest.mark.parametrize(
    "value,expected_segment,expected_attribute",
    [
        ('n=a"b', 'a"b', ""),
        ('n="abc', '"abc', ""),
        ("n=a,b; Path=/", "a,b", ""),
        ('n=" padded"', " padded", ""),
        ("n=v; Domain=exa\x01mple.com", "exa\x01mple.com", "Domain"),
        ("n=v; Path=/\x7f", "/\x7f", "Path"),
    ],
)
def test_parse_cookie_invalid_values(value, expected_segment, expected_attribute):
    with pytest.raises(InvalidValueCharacter) as error_info:
        parse_cookie(value)

    assert error_info.value.segment == expected_segment
    assert error_info.value.attribute == expected_attribute


def test_parse_header_invalid_value_aborts():
    with pytest.raises(InvalidValueCharacter) as error_info:
        parse_cookie_header("a=1; b=x\\y; c=3")

    assert error_info.value.segment == "x\\y"
