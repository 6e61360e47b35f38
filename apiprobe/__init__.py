# ruff: noqa: I001
from ._exceptions import (  # noqa: F401
    ApiProbeError,
    ConfigurationError,
    SessionNotStartedError,
    UnsupportedOptionError,
)
from .config import Settings  # noqa: F401
from .drivers import BrowserKitDriver, Cookie, Driver, RemoteDriver  # noqa: F401
from .options import RequestOptions  # noqa: F401
from .url import Url  # noqa: F401
from .session import Session  # noqa: F401
from .cookies import decorate_with_session_cookies  # noqa: F401
from .requests import ApiRequestMixin, make_api_request  # noqa: F401
from . import assertions  # noqa: F401

__title__ = "apiprobe"
__description__ = "HTTP request helpers for API functional tests."
__version__ = "0.1.0"

_EXCLUDED_FROM_ALL = {
    "config",
    "cookies",
    "drivers",
    "options",
    "pytest_plugin",
    "requests",
    "session",
    "url",
}

__all__ = sorted(  # pyright: ignore[reportUnsupportedDunderAll]
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
