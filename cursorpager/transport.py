from typing import Any, Protocol

import requests

from cursorpager.exceptions import TransportError
from cursorpager.log import logger


class Transport(Protocol):
    """Performs a GET and returns the parsed JSON body."""

    def get(self, url: str) -> Any: ...


class RequestsTransport:
    """
    GETs JSON documents with a requests session.

    The hard per-request deadline is enforced by the TimedCaller wrapping the
    transport. `timeout` is only a socket-level backstop, so a request the
    deadline abandoned still releases its thread and socket eventually. A
    zero-byte body is not valid JSON and is reported as a TransportError.
    """

    def __init__(
        self, session: requests.Session | None = None, timeout: float | None = None
    ):
        self.session = session if session else requests.Session()
        self.timeout = timeout
        self.logger = logger.getChild(self.__class__.__name__)

    def get(self, url: str) -> Any:
        self.logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.JSONDecodeError as e:
            raise TransportError(url, f"invalid JSON body: {e}") from e
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
