"""
apiprobe.requests — send API requests from functional tests.

Requests are sent with two defaults that suit assertions better than the
usual client behaviour:

* non-2xx responses never raise, so tests assert on error responses directly;
* redirects are never followed, so tests see the redirect itself.

Both are forced on every request whatever the caller passes. Cookies held by
the session's browser driver (for example an ``XDEBUG_SESSION`` cookie) are
copied into the ``Cookie`` header.

Examples
--------
>>> with Session(BrowserKitDriver()) as session:
...     response = make_api_request(session, "GET", Url.from_path("/node/1"), {})
...     assert response.status_code == 404
"""

from __future__ import annotations

import logging
import typing

import httpx

from .cookies import decorate_with_session_cookies
from .options import RequestOptions, to_client_kwargs
from .url import URLTypes, absolute_url

if typing.TYPE_CHECKING:
    from .session import Session

logger = logging.getLogger("apiprobe.requests")

FORCED_OPTIONS: dict[str, typing.Any] = {
    RequestOptions.HTTP_ERRORS: False,
    RequestOptions.ALLOW_REDIRECTS: False,
}


def prepare_request_options(
    method: str, request_options: typing.Mapping[str, typing.Any]
) -> dict[str, typing.Any]:
    """Copy ``request_options`` and apply the test-mode defaults."""
    prepared = dict(request_options)
    # HEAD requests have no body. Sending one anyway makes the request
    # indistinguishable from GET and the client waits for a response body.
    if method == "HEAD":
        prepared.pop(RequestOptions.BODY, None)
    return {**prepared, **FORCED_OPTIONS}


def send_request(
    client: httpx.Client,
    method: str,
    url: str,
    request_options: typing.Mapping[str, typing.Any],
) -> httpx.Response:
    """Send one request with ``client`` and return its response untouched.

    This is the lower-level helper behind :func:`make_api_request`, which
    always passes ``http_errors=False``. Called directly with
    ``http_errors=True`` it raises ``httpx.HTTPStatusError`` for 4xx and
    5xx responses.
    """
    response = client.request(method, url, **to_client_kwargs(request_options))
    if request_options.get(RequestOptions.HTTP_ERRORS):
        response.raise_for_status()
    return response


def _send(
    session: Session,
    method: str,
    url: URLTypes,
    prepared: typing.Mapping[str, typing.Any],
) -> httpx.Response:
    target = absolute_url(url, session.settings.base_url)
    logger.debug("%s %s", method, target)
    response = send_request(session.http_client, method, target, prepared)
    logger.debug("%s %s -> %s", method, target, response.status_code)
    return response


def make_api_request(
    session: Session,
    method: str,
    url: URLTypes,
    request_options: typing.Mapping[str, typing.Any],
) -> httpx.Response:
    """Perform an HTTP request against the application under test.

    Parameters
    ----------
    session:
        The started test session.
    method:
        HTTP method.
    url:
        A :class:`~apiprobe.Url`, ``httpx.URL`` or string. Relative values
        are resolved against the session's base URL.
    request_options:
        Mapping keyed by :class:`~apiprobe.RequestOptions` names. It is
        copied, never modified.

    Returns
    -------
    httpx.Response
        The client's response, whatever its status code.
    """
    prepared = prepare_request_options(method, request_options)
    session.refresh_variables()
    prepared = decorate_with_session_cookies(prepared, session.get_driver())
    return _send(session, method, url, prepared)


class ApiRequestMixin:
    """Request helpers for class-based test suites.

    The test class provides :meth:`get_session`; :meth:`refresh_variables`
    runs the session's refresh hooks unless overridden::

        class TestNodeApi(ApiRequestMixin):
            @pytest.fixture(autouse=True)
            def _session(self, api_session):
                self.session = api_session

            def get_session(self):
                return self.session

            def test_missing_node(self):
                response = self.make_api_request("GET", Url.from_path("/node/999"), {})
                assert response.status_code == 404
    """

    def get_session(self) -> Session:
        raise NotImplementedError

    def refresh_variables(self) -> None:
        self.get_session().refresh_variables()

    def decorate_with_session_cookies(
        self, request_options: typing.Mapping[str, typing.Any]
    ) -> dict[str, typing.Any]:
        return decorate_with_session_cookies(request_options, self.get_session().get_driver())

    def make_api_request(
        self,
        method: str,
        url: URLTypes,
        request_options: typing.Mapping[str, typing.Any],
    ) -> httpx.Response:
        """Perform an HTTP request; see :func:`apiprobe.make_api_request`."""
        session = self.get_session()
        prepared = prepare_request_options(method, request_options)
        self.refresh_variables()
        prepared = self.decorate_with_session_cookies(prepared)
        return _send(session, method, url, prepared)
