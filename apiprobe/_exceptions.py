from __future__ import annotations


class ApiProbeError(Exception):
    """Base class for errors raised by apiprobe itself."""


class ConfigurationError(ApiProbeError):
    """Raised when settings read from the environment are invalid."""


class SessionNotStartedError(ApiProbeError):
    """Raised when a driver or session is used before ``start()`` or after ``stop()``."""


class UnsupportedOptionError(ApiProbeError):
    """Raised when a request option has no client equivalent.

    Attributes:
        option: The offending option name.
    """

    def __init__(self, option: str) -> None:
        super().__init__(f"Unsupported request option: {option!r}")
        self.option = option
