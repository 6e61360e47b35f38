"""
apiprobe.drivers — browser drivers backing a test session.

Two kinds of driver exist:

* :class:`BrowserKitDriver` emulates a browser in-process on top of an
  ``httpx.Client``. It keeps cookies between requests, so it exposes a
  cookie jar through :meth:`Driver.cookie_jar`.
* :class:`RemoteDriver` stands for a real browser driven over WebDriver.
  Its cookies live in the remote browser and are not visible here, so
  :meth:`Driver.cookie_jar` returns ``None``.
"""

from __future__ import annotations

import http.cookiejar
import logging
import typing

import httpx

from ._exceptions import SessionNotStartedError

logger = logging.getLogger("apiprobe.drivers")


class Cookie(typing.NamedTuple):
    name: str
    value: str


class _RejectAllCookies(http.cookiejar.DefaultCookiePolicy):
    def set_ok(self, cookie: http.cookiejar.Cookie, request: typing.Any) -> bool:
        return False


def build_api_client(
    transport: httpx.BaseTransport | None = None,
    timeout: float | httpx.Timeout = 30.0,
) -> httpx.Client:
    """Build a client that never stores cookies from its responses.

    API requests carry their cookies explicitly in the ``Cookie`` header, so a
    ``Set-Cookie`` answer must not leak into later requests.
    """
    return httpx.Client(
        transport=transport,
        timeout=timeout,
        cookies=http.cookiejar.CookieJar(policy=_RejectAllCookies()),
    )


class Driver:
    """Base driver. Subclasses opt into capabilities by overriding them."""

    def __init__(self) -> None:
        self._started = False

    def start(self) -> None:
        self._started = True

    def stop(self) -> None:
        self._started = False

    def is_started(self) -> bool:
        return self._started

    def get_client(self) -> httpx.Client | None:
        """Return the HTTP client the driver browses with, if it has one."""
        return None

    def get_api_client(self) -> httpx.Client | None:
        """Return a client for API requests that shares the browser transport."""
        return None

    def cookie_jar(self) -> typing.Sequence[Cookie] | None:
        """Return the cookies held by the driver, or ``None`` if it keeps none."""
        return None


class BrowserKitDriver(Driver):
    """In-process browser emulation on top of ``httpx.Client``.

    Pass ``client`` to reuse an existing client (it is not closed by
    :meth:`stop`), or ``transport`` to have the driver build its own.

    API requests go through a second client from :func:`build_api_client`
    on the same ``transport``, so their responses never write to the
    browser's cookie jar.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float | httpx.Timeout = 30.0,
    ) -> None:
        super().__init__()
        self._client = client
        self._owns_client = client is None
        self._transport = transport
        self._timeout = timeout
        self._api_client: httpx.Client | None = None

    def start(self) -> None:
        if self._started:
            return
        if self._client is None:
            self._client = httpx.Client(
                transport=self._transport,
                timeout=self._timeout,
                follow_redirects=True,
            )
        super().start()
        logger.debug("BrowserKitDriver started")

    def stop(self) -> None:
        if not self._started:
            return
        if self._api_client is not None:
            self._api_client.close()
            self._api_client = None
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
        super().stop()
        logger.debug("BrowserKitDriver stopped")

    def get_client(self) -> httpx.Client:
        if not self._started or self._client is None:
            raise SessionNotStartedError("BrowserKitDriver has not been started")
        return self._client

    def get_api_client(self) -> httpx.Client:
        self.get_client()
        if self._api_client is None:
            self._api_client = build_api_client(self._transport, self._timeout)
        return self._api_client

    def cookie_jar(self) -> list[Cookie]:
        """List the browser's cookies.

        ``http.cookiejar`` enumerates cookies sorted by domain, path and name,
        not in the order they were set.
        """
        return [
            Cookie(cookie.name, cookie.value or "")
            for cookie in self.get_client().cookies.jar
        ]

    def set_cookie(self, name: str, value: str) -> None:
        self.get_client().cookies.set(name, value)

    def reset(self) -> None:
        """Forget every cookie, as a fresh browser would."""
        self.get_client().cookies.clear()

    def visit(self, url: str) -> httpx.Response:
        """Navigate to ``url`` the way a browser would, following redirects."""
        return self.get_client().get(url)


class RemoteDriver(Driver):
    """A real browser driven over WebDriver. Exposes no cookie jar."""

    def __init__(self, webdriver_url: str) -> None:
        super().__init__()
        self.webdriver_url = webdriver_url

    def start(self) -> None:
        super().start()
        logger.debug("RemoteDriver attached to %s", self.webdriver_url)
