"""
apiprobe.options — request option vocabulary.

Tests describe a request with a plain mapping keyed by the names below::

    from apiprobe import RequestOptions

    options = {
        RequestOptions.HEADERS: {"Accept": "application/json"},
        RequestOptions.BODY: b'{"title": "Hello"}',
    }

:func:`to_client_kwargs` turns such a mapping into keyword arguments for
``httpx.Client.request``.
"""

from __future__ import annotations

import typing

from ._exceptions import UnsupportedOptionError


class RequestOptions:
    """Names of the options understood by the request dispatcher."""

    BODY = "body"
    JSON = "json"
    FORM_PARAMS = "form_params"
    QUERY = "query"
    HEADERS = "headers"
    AUTH = "auth"
    TIMEOUT = "timeout"
    HTTP_ERRORS = "http_errors"
    ALLOW_REDIRECTS = "allow_redirects"


# Options with a direct httpx keyword counterpart.
_CLIENT_KWARGS: dict[str, str] = {
    RequestOptions.BODY: "content",
    RequestOptions.JSON: "json",
    RequestOptions.FORM_PARAMS: "data",
    RequestOptions.QUERY: "params",
    RequestOptions.HEADERS: "headers",
    RequestOptions.AUTH: "auth",
    RequestOptions.TIMEOUT: "timeout",
    RequestOptions.ALLOW_REDIRECTS: "follow_redirects",
}

# Options consumed by the dispatcher rather than passed to the client.
_DISPATCHER_OPTIONS = frozenset({RequestOptions.HTTP_ERRORS})


def to_client_kwargs(options: typing.Mapping[str, typing.Any]) -> dict[str, typing.Any]:
    """Translate request options into ``httpx.Client.request`` keyword arguments.

    Raises :class:`UnsupportedOptionError` for names outside
    :class:`RequestOptions`.
    """
    kwargs: dict[str, typing.Any] = {}
    for name, value in options.items():
        if name in _DISPATCHER_OPTIONS:
            continue
        try:
            kwargs[_CLIENT_KWARGS[name]] = value
        except KeyError:
            raise UnsupportedOptionError(name) from None
    return kwargs
