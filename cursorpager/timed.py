import queue
import threading
import time
from typing import Any, Callable

from cursorpager.exceptions import RequestTimeoutError, TransportError
from cursorpager.log import logger

from .transport import Transport

_VALUE = "value"
_ERROR = "error"
_TIMEOUT = "timeout"


class TimedCaller:
    """
    Races a transport GET against a deadline.

    The GET and the deadline each run on a daemon thread and report into a
    queue; the first outcome reported wins. When the deadline wins the GET is
    left to finish on its own and whatever it produces is discarded. The
    underlying socket is not aborted, but a daemon thread never keeps the
    process alive at exit.
    """

    def __init__(
        self,
        transport: Transport,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initializes a timed caller.

        Args:
            transport (Transport): Transport performing the GET.
            sleep (Callable[[float], None]): Delay primitive that fires the deadline.
        """
        self.transport = transport
        self.sleep = sleep
        self.logger = logger.getChild(self.__class__.__name__)

    def call(self, url: str, timeout: float) -> Any:
        outcomes: queue.Queue[tuple[str, Any]] = queue.Queue()

        threading.Thread(
            target=self._fetch, args=(url, outcomes), daemon=True
        ).start()
        threading.Thread(
            target=self._deadline, args=(timeout, outcomes), daemon=True
        ).start()

        kind, payload = outcomes.get()
        if kind == _TIMEOUT:
            self.logger.debug(f"Request to {url} exceeded {timeout}s")
            raise RequestTimeoutError(url, timeout)
        if kind == _ERROR:
            if isinstance(payload, TransportError):
                raise payload
            raise TransportError(url, str(payload)) from payload
        return payload

    def _fetch(self, url: str, outcomes: queue.Queue) -> None:
        try:
            outcomes.put((_VALUE, self.transport.get(url)))
        except Exception as e:
            outcomes.put((_ERROR, e))

    def _deadline(self, timeout: float, outcomes: queue.Queue) -> None:
        self.sleep(timeout)
        outcomes.put((_TIMEOUT, None))
