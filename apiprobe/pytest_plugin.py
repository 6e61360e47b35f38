"""
pytest fixtures for API functional tests.

Enable them from a ``conftest.py``::

    pytest_plugins = ["apiprobe.pytest_plugin"]

then request ``api_request`` in a test::

    def test_missing_node(api_request):
        response = api_request("GET", Url.from_path("/node/999"))
        assert response.status_code == 404
"""

from __future__ import annotations

import functools
import typing

import httpx
import pytest

from .config import Settings
from .drivers import BrowserKitDriver
from .requests import make_api_request
from .session import Session
from .url import URLTypes


class ApiRequest(typing.Protocol):
    def __call__(
        self,
        method: str,
        url: URLTypes,
        request_options: typing.Mapping[str, typing.Any] = ...,
    ) -> httpx.Response: ...


@pytest.fixture
def apiprobe_settings() -> Settings:
    return Settings.from_env()


@pytest.fixture
def api_session(apiprobe_settings: Settings) -> typing.Iterator[Session]:
    driver = BrowserKitDriver(timeout=apiprobe_settings.timeout)
    with Session(driver, apiprobe_settings) as session:
        yield session


def _bound_request(
    session: Session,
    method: str,
    url: URLTypes,
    request_options: typing.Mapping[str, typing.Any] | None = None,
) -> httpx.Response:
    return make_api_request(session, method, url, request_options or {})


@pytest.fixture
def api_request(api_session: Session) -> ApiRequest:
    return functools.partial(_bound_request, api_session)
