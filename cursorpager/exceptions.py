from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import PageRequest


class CursorPagerError(Exception):
    """Base exception for cursorpager."""

    pass


class TransportError(CursorPagerError):
    """Raised when the transport fails to GET or parse a response."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"request to [{url}] failed: {message}")


class RequestTimeoutError(CursorPagerError):
    """Raised when a request does not settle before its deadline."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"timeout at [{url}]")


class RetriesExhaustedError(CursorPagerError):
    """Raised when every attempt for a page has failed.

    Carries the request of the final attempt and the error it failed with.
    """

    def __init__(self, request: "PageRequest", last_error: BaseException):
        self.request = request
        self.last_error = last_error
        super().__init__(
            f"max retries ({request.attempt}) reached for [{request.target}]: "
            f"{last_error}"
        )

    @property
    def attempts(self) -> int:
        return self.request.attempt
