"""Failure kinds raised by the fetcher and reported by the pipeline."""
from __future__ import annotations

from enum import Enum

from .utils import redact_url


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    UPSTREAM_HTTP = "upstream_http"
    UPSTREAM_API = "upstream_api"
    # not a fault: the fetch worked but nothing qualified
    EMPTY_RESULT = "empty_result"
    # anything outside the fetcher taxonomy
    INTERNAL = "internal"


class FetchError(Exception):
    kind: ErrorKind

    def describe(self) -> str:
        return f"{self.kind.value}: {self}"


class TransportError(FetchError):
    kind = ErrorKind.TRANSPORT

    def __init__(self, cause: BaseException):
        # requests puts the full url, credential included, in its messages
        super().__init__(redact_url(f"{type(cause).__name__}: {cause}"))
        self.cause = cause


class UpstreamHttpError(FetchError):
    kind = ErrorKind.UPSTREAM_HTTP

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body = body


class UpstreamApiError(FetchError):
    kind = ErrorKind.UPSTREAM_API

    def __init__(self, message: str, code: str = "", context=None):
        super().__init__(redact_url(message or "API error occurred"))
        self.message = message
        self.code = code
        self.context = context
