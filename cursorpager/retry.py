import logging
import time
from typing import Callable

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from cursorpager.config import PaginationConfig
from cursorpager.exceptions import CursorPagerError, RetriesExhaustedError
from cursorpager.log import logger as package_logger

from .models import Cursor, Page, PageRequest
from .timed import TimedCaller


class RetryingFetcher:
    """
    Fetches one page, retrying failed attempts after a fixed delay.

    Every attempt goes through the TimedCaller with the configured request
    timeout. Attempts run strictly one after another and all of them target
    the same cursor. Once `max_retries` attempts have failed the last error is
    raised wrapped in a RetriesExhaustedError.
    """

    def __init__(
        self,
        caller: TimedCaller,
        config: PaginationConfig,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger | None = None,
    ):
        """
        Initializes a retrying fetcher.

        Args:
            caller (TimedCaller): Timed caller performing single attempts.
            config (PaginationConfig): Retry count, retry delay and timeout.
            sleep (Callable[[float], None]): Delay primitive used between attempts.
            logger (logging.Logger | None): Receives retry and exhaustion events.
        """
        self.caller = caller
        self.config = config
        self.sleep = sleep
        self.logger = logger or package_logger.getChild(self.__class__.__name__)

    def fetch(self, url: str, cursor: Cursor) -> Page:
        """
        Fetches the page following `cursor`.

        Args:
            url (str): Endpoint URL, the cursor is appended as `tid`.
            cursor (Cursor): Identifier to continue after.

        Returns:
            Page: The records returned by the first successful attempt.

        Raises:
            RetriesExhaustedError: When all attempts failed.
        """
        request = PageRequest(url=url, cursor=cursor)
        retrying = Retrying(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_fixed(self.config.retry_delay),
            retry=retry_if_exception_type(CursorPagerError),
            sleep=self.sleep,
            before_sleep=self._log_retry,
        )

        try:
            for attempt in retrying:
                with attempt:
                    if attempt.retry_state.attempt_number > request.attempt:
                        request = request.next_attempt()
                    return self.caller.call(
                        request.target, self.config.request_timeout
                    )
        except RetryError as e:
            last_error = e.last_attempt.exception()
            self.logger.error(f"[{request.attempt}] max retries reached!")
            raise RetriesExhaustedError(request, last_error) from last_error

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self.logger.warning(
            f"[{retry_state.attempt_number}] an error: [{error}] has happened! "
            f"Trying again in {self.config.retry_delay}s"
        )
