import time
from collections.abc import Iterator, Mapping, Sequence
from typing import Callable

from cursorpager.log import logger

from .models import Cursor, Page
from .retry import RetryingFetcher

# trailing identifier signalling that the endpoint has no further records
EMPTY_SENTINEL = 0


def trailing_identifier(page: Page) -> Cursor | None:
    """Returns the `tid` of the last record in `page`, or None."""
    if not isinstance(page, Sequence) or isinstance(page, (str, bytes)) or not page:
        return None
    last = page[-1]
    if not isinstance(last, Mapping):
        return None
    return last.get("tid")


def is_terminal(identifier: Cursor | None) -> bool:
    # a bool is never an identifier, treat it like a missing one
    if identifier is None or isinstance(identifier, bool):
        return True
    # JSON numbers may decode as floats, 0.0 ends the stream too
    return isinstance(identifier, (int, float)) and identifier == EMPTY_SENTINEL


class PaginatedCursorStream(Iterator[Page]):
    """
    Lazy, forward-only sequence of pages.

    Nothing is fetched until the consumer pulls. Each pull performs one
    fetch (retries included) for the current cursor. A page whose trailing
    identifier is missing or equals EMPTY_SENTINEL ends the stream without
    being returned. A fetch error is raised at the pull and ends the stream.

    The page delay and the cursor advance run at the start of the pull that
    follows a delivered page, so a consumer that stops early never waits.
    """

    def __init__(
        self,
        fetcher: RetryingFetcher,
        url: str,
        cursor: Cursor,
        page_delay: float,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.fetcher = fetcher
        self.url = url
        self.page_delay = page_delay
        self.sleep = sleep
        self.logger = logger.getChild(self.__class__.__name__)

        self._cursor = cursor
        self._next_cursor: Cursor | None = None
        self._pages_yielded = 0
        self._done = False

    @property
    def cursor(self) -> Cursor:
        """Cursor the next fetch will target."""
        if self._next_cursor is not None:
            return self._next_cursor
        return self._cursor

    @property
    def pages_yielded(self) -> int:
        return self._pages_yielded

    @property
    def done(self) -> bool:
        return self._done

    def __iter__(self) -> "PaginatedCursorStream":
        return self

    def __next__(self) -> Page:
        if self._done:
            raise StopIteration

        if self._next_cursor is not None:
            self.sleep(self.page_delay)
            self._cursor = self._next_cursor
            self._next_cursor = None

        self.logger.debug(f"Fetching page after cursor {self._cursor}")
        try:
            page = self.fetcher.fetch(self.url, self._cursor)
        except Exception:
            self._done = True
            raise

        identifier = trailing_identifier(page)
        if is_terminal(identifier):
            self.logger.info(
                f"Reached end of {self.url} after {self._pages_yielded} pages"
            )
            self._done = True
            raise StopIteration

        self._pages_yielded += 1
        self._next_cursor = identifier
        return page
