from typing import Any, Callable

from essentials.json import dumps


def default_json_dumps(obj: Any) -> str:
    return dumps(obj, separators=(",", ":"))


def default_pretty_json_dumps(obj: Any) -> str:
    return dumps(obj, indent=4)


class JSONSettings:
    """
    Configures the functions used to serialize cookie and jar snapshots to JSON
    (see `Cookie.to_dict` and `CookieJar.to_json`).
    """

    def __init__(self) -> None:
        self._dumps = default_json_dumps
        self._pretty_dumps = default_pretty_json_dumps

    def use(
        self,
        dumps: Callable[[Any], str] = default_json_dumps,
        pretty_dumps: Callable[[Any], str] = default_pretty_json_dumps,
    ) -> None:
        self._dumps = dumps
        self._pretty_dumps = pretty_dumps

    def dumps(self, obj: Any) -> str:
        return self._dumps(obj)

    def pretty_dumps(self, obj: Any) -> str:
        return self._pretty_dumps(obj)


json_settings = JSONSettings()
