import pytest

from cookiekit.settings.json import json_settings
from cookiekit.settings.parsing import parsing_settings


@pytest.fixture()
def strict_parsing():
    """
    Enables strict parsing for a test, restoring the previous settings afterwards.
    """
    strict = parsing_settings.strict
    max_value_length = parsing_settings.max_value_length
    parsing_settings.use(strict=True, max_value_length=max_value_length)
    yield True
    parsing_settings.use(strict=strict, max_value_length=max_value_length)


@pytest.fixture()
def restore_settings():
    strict = parsing_settings.strict
    max_value_length = parsing_settings.max_value_length
    dumps = json_settings._dumps
    pretty_dumps = json_settings._pretty_dumps
    yield
    parsing_settings.use(strict=strict, max_value_length=max_value_length)
    json_settings.use(dumps=dumps, pretty_dumps=pretty_dumps)
