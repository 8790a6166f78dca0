from __future__ import annotations

from typing import Any, Optional


class ApiError(Exception):
    """
    Transport-level failure raised by the endpoint layer.
    - code == 0: no response was received (connect/read failure, timeout)
    - otherwise: the HTTP status, with the reason phrase as message
    """

    def __init__(
        self,
        *,
        code: int,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        response_body: Any = None,
    ):
        detail = f"{method} {url}: " if method and url else ""
        super().__init__(f"{code} {detail}{message}")
        self.code = code
        self.message = message
        self.method = method
        self.url = url
        self.response_body = response_body

    @property
    def no_response(self) -> bool:
        return self.code == 0

    @property
    def unauthorized(self) -> bool:
        return self.code == 401 or self.message == "Unauthorized"


class TriglavClientError(Exception):
    """Base error for client failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class TriglavConnectionError(TriglavClientError):
    """The Triglav API could not be reached at all."""


class TriglavAuthenticationError(TriglavClientError):
    """The Triglav API rejected the credentials during authentication."""


__all__ = [
    "ApiError",
    "TriglavClientError",
    "TriglavConnectionError",
    "TriglavAuthenticationError",
]
