from __future__ import annotations

import typing

import httpx

from ._exceptions import ConfigurationError

URLTypes = typing.Union["Url", httpx.URL, str]


def _normalize_base_url(base_url: str | httpx.URL) -> httpx.URL:
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Invalid base URL {str(base_url)!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Base URL must be an absolute http(s) URL, got {str(url)!r}")
    if not url.path.endswith("/"):
        url = url.copy_with(path=url.path + "/")
    return url


def _join_path(base_url: httpx.URL, relative: httpx.URL) -> httpx.URL:
    # Concatenated, not resolved: a segment like "user:1" is never a scheme.
    return base_url.copy_with(
        path=base_url.path + relative.path.lstrip("/"),
        query=relative.query or None,
    )


class Url:
    """A path on the application under test.

    A ``Url`` renders as ``/path?query`` until :meth:`set_absolute` is
    called, after which :meth:`to_string` joins it onto its base URL::

        >>> url = Url.from_path("/node/1", base_url="http://localhost/")
        >>> url.to_string()
        '/node/1'
        >>> url.set_absolute().to_string()
        'http://localhost/node/1'

    Paths are resolved below the base URL's own path, so a site installed
    at ``http://localhost/sub/`` maps ``/node/1`` to
    ``http://localhost/sub/node/1``.
    """

    def __init__(
        self,
        path: str,
        query: typing.Mapping[str, typing.Any] | None = None,
        base_url: str | httpx.URL | None = None,
    ) -> None:
        self._path = path if path.startswith("/") else f"/{path}"
        self._query = dict(query or {})
        self._base_url = _normalize_base_url(base_url) if base_url is not None else None
        self._absolute = False

    @classmethod
    def from_path(
        cls,
        path: str,
        query: typing.Mapping[str, typing.Any] | None = None,
        base_url: str | httpx.URL | None = None,
    ) -> Url:
        return cls(path, query=query, base_url=base_url)

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> dict[str, typing.Any]:
        return dict(self._query)

    @property
    def base_url(self) -> httpx.URL | None:
        return self._base_url

    def set_absolute(self, absolute: bool = True) -> Url:
        self._absolute = absolute
        return self

    def is_absolute(self) -> bool:
        return self._absolute

    def copy_with(self, base_url: str | httpx.URL | None = None) -> Url:
        """Return a copy, optionally rebound to another base URL."""
        if base_url is None:
            base_url = self._base_url
        copy = Url(self._path, query=self._query, base_url=base_url)
        copy._absolute = self._absolute
        return copy

    def to_string(self) -> str:
        relative = httpx.URL(self._path, params=self._query or None)
        if not self._absolute:
            return str(relative)
        if self._base_url is None:
            raise ConfigurationError(f"Cannot render {self._path!r} as absolute without a base URL")
        return str(_join_path(self._base_url, relative))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        base_url = str(self._base_url) if self._base_url is not None else None
        return f"Url({self._path!r}, query={self._query!r}, base_url={base_url!r})"


def absolute_url(url: URLTypes, base_url: str | httpx.URL) -> str:
    """Resolve ``url`` to an absolute string without touching the caller's value.

    ``Url`` values without their own base URL and relative strings are joined
    onto ``base_url``. Absolute strings pass through unchanged.
    """
    if isinstance(url, Url):
        bound = url.copy_with(base_url=base_url) if url.base_url is None else url.copy_with()
        return bound.set_absolute().to_string()
    parsed = httpx.URL(url)
    if parsed.is_absolute_url:
        return str(parsed)
    if isinstance(url, str):
        parsed = httpx.URL("/" + url.lstrip("/"))
    return str(_join_path(_normalize_base_url(base_url), parsed))
