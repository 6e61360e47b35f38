from __future__ import annotations

import logging
import typing

from .drivers import Driver
from .options import RequestOptions

logger = logging.getLogger("apiprobe.cookies")

COOKIE_HEADER = "Cookie"


def _cookie_header_key(headers: typing.Mapping[str, str]) -> str:
    for key in headers:
        if key.lower() == "cookie":
            return key
    return COOKIE_HEADER


def decorate_with_session_cookies(
    options: typing.Mapping[str, typing.Any], driver: Driver
) -> dict[str, typing.Any]:
    """Return a copy of ``options`` carrying the driver's cookies.

    Each cookie held by the driver is appended to the ``Cookie`` header as
    ``name=value``, in jar order and without de-duplication. Drivers that keep
    no cookie jar leave the options as they are.
    """
    decorated = dict(options)
    jar = driver.cookie_jar()
    if jar is None:
        return decorated

    headers = dict(decorated.get(RequestOptions.HEADERS) or {})
    key = _cookie_header_key(headers)
    for cookie in jar:
        pair = f"{cookie.name}={cookie.value}"
        if key in headers:
            headers[key] = f"{headers[key]}; {pair}"
        else:
            headers[key] = pair

    if jar:
        decorated[RequestOptions.HEADERS] = headers
        logger.debug("Forwarding %d session cookie(s)", len(jar))
    return decorated
