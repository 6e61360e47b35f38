from __future__ import annotations

import json
import typing

import httpx

TEXT_CONTENT_TYPES = (
    "text/",
    "application/json",
    "application/xml",
    "application/javascript",
    "application/ecmascript",
    "application/problem+json",
    "application/vnd.api+json",
    "application/hal+json",
)


def is_binary_content(content: bytes) -> bool:
    return b"\0" in content


def is_binary_content_type(content_type: str) -> bool:
    ct = content_type.lower().split(";")[0].strip()
    return not any(ct.startswith(t) for t in TEXT_CONTENT_TYPES) and ct != ""


def format_response(response: httpx.Response) -> str:
    """Render a response as a status line, headers and body, HTTP/1.1 style."""
    status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()
    lines: list[str] = [status_line]

    for key, value in response.headers.items():
        lines.append(f"{key}: {value}")

    lines.append("")

    content = response.content
    if content:
        content_type = response.headers.get("content-type", "")
        if is_binary_content_type(content_type) or is_binary_content(content):
            lines.append(f"<{len(content)} bytes of binary data>")
        elif "json" in content_type:
            try:
                lines.append(json.dumps(json.loads(response.text), indent=4, ensure_ascii=False))
            except (json.JSONDecodeError, TypeError):
                lines.append(response.text)
        else:
            lines.append(response.text)

    return "\n".join(lines)


def _fail(message: str, response: httpx.Response) -> typing.NoReturn:
    raise AssertionError(f"{message}\n\n{format_response(response)}")


def assert_response_status(response: httpx.Response, expected: int) -> None:
    if response.status_code != expected:
        _fail(f"Expected status {expected}, got {response.status_code}", response)


def assert_redirect(
    response: httpx.Response, location: str, status: int | None = None
) -> None:
    """Assert ``response`` redirects to ``location``.

    Any 3xx status is accepted unless ``status`` pins one. ``location`` is
    compared with the ``Location`` header as sent, relative or absolute.
    """
    if status is not None:
        assert_response_status(response, status)
    elif not response.is_redirect:
        _fail(f"Expected a redirect, got {response.status_code}", response)
    actual = response.headers.get("location")
    if actual != location:
        _fail(f"Expected redirect to {location!r}, got {actual!r}", response)


def assert_header(response: httpx.Response, name: str, expected: str | None) -> None:
    """Assert header ``name`` equals ``expected``; ``None`` asserts it is absent."""
    actual = response.headers.get(name)
    if actual != expected:
        _fail(f"Expected header {name!r} to be {expected!r}, got {actual!r}", response)
