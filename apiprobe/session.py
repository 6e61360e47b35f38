from __future__ import annotations

import logging
import typing

import httpx

from ._exceptions import SessionNotStartedError
from .config import Settings
from .drivers import BrowserKitDriver, Driver, build_api_client

logger = logging.getLogger("apiprobe.session")

RefreshHook = typing.Callable[[], None]


class Session:
    """The state a functional test shares across its API requests.

    A session owns the browser driver, the settings of the application under
    test and the hooks that refresh cached state before each request::

        with Session(BrowserKitDriver()) as session:
            response = make_api_request(session, "GET", Url.from_path("/node/1"), {})
    """

    def __init__(
        self,
        driver: Driver,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._driver = driver
        self.settings = settings if settings is not None else Settings()
        self._client = client
        self._fallback_client: httpx.Client | None = None
        self._refresh_hooks: list[RefreshHook] = []
        self._started = False

    def start(self) -> Session:
        if self._started:
            return self
        self._driver.start()
        if isinstance(self._driver, BrowserKitDriver):
            for name, value in self.settings.debug_cookies.items():
                self._driver.set_cookie(name, value)
        self._started = True
        logger.info("Session started with %s against %s", type(self._driver).__name__, self.settings.base_url)
        return self

    def stop(self) -> None:
        if not self._started:
            return
        if self._fallback_client is not None:
            self._fallback_client.close()
            self._fallback_client = None
        self._driver.stop()
        self._started = False
        logger.info("Session stopped")

    def is_started(self) -> bool:
        return self._started

    def __enter__(self) -> Session:
        return self.start()

    def __exit__(self, *args: typing.Any) -> None:
        self.stop()

    def get_driver(self) -> Driver:
        if not self._started:
            raise SessionNotStartedError("Session has not been started")
        return self._driver

    @property
    def http_client(self) -> httpx.Client:
        """The client API requests are sent with.

        An explicitly supplied client wins, then the driver's API client.
        Drivers without one get a client from :func:`build_api_client`
        created on first use. Neither of the last two stores response cookies.
        """
        if self._client is not None:
            return self._client
        driver_client = self.get_driver().get_api_client()
        if driver_client is not None:
            return driver_client
        if self._fallback_client is None:
            self._fallback_client = build_api_client(timeout=self.settings.timeout)
        return self._fallback_client

    def add_refresh_hook(self, hook: RefreshHook) -> None:
        self._refresh_hooks.append(hook)

    def refresh_variables(self) -> None:
        """Run the refresh hooks in registration order."""
        for hook in self._refresh_hooks:
            hook()
