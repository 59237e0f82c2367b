import time
from typing import Callable

from cursorpager.log import logger

from .config import PaginationConfig
from .models import Cursor, Page, Record
from .pagination import PaginatedCursorStream
from .retry import RetryingFetcher
from .timed import TimedCaller
from .transport import RequestsTransport, Transport


class CursorPaginationClient:
    """
    Retrieves pages from a cursor-paginated JSON endpoint.

    CursorPaginationClient wires a transport, a timed caller and a retrying
    fetcher together and hands out lazy page streams that follow the `tid`
    of each page's last record.
    """

    def __init__(
        self,
        config: PaginationConfig | None = None,
        transport: Transport | None = None,
        sleep: Callable[[float], None] = time.sleep,
        deadline_sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initializes a pagination client.

        Args:
            config (PaginationConfig): The pagination config to use
            transport (Transport): Transport performing the GETs, a
                RequestsTransport owned by the client when omitted
            sleep (Callable[[float], None]): Delay primitive for retry and page delays
            deadline_sleep (Callable[[float], None]): Delay primitive firing the
                per-request timeout. It runs on its own thread next to the GET,
                so it is faked separately from `sleep`.
        """
        self.config = config if config else PaginationConfig()
        self._owns_transport = transport is None
        self.transport = (
            transport
            if transport
            else RequestsTransport(timeout=self.config.transport_timeout)
        )
        self.sleep = sleep
        self.logger = logger.getChild(self.__class__.__name__)

        self.fetcher = RetryingFetcher(
            TimedCaller(self.transport, sleep=deadline_sleep),
            self.config,
            sleep=self.sleep,
        )

    def fetch_page(self, url: str, cursor: Cursor) -> Page:
        """Fetches the single page following `cursor`, with retries."""
        return self.fetcher.fetch(url, cursor)

    def paginate(self, url: str, cursor: Cursor) -> PaginatedCursorStream:
        """
        Returns a lazy stream of pages starting after `cursor`.

        Each call starts a fresh stream. Nothing is requested until the
        first page is pulled.
        """
        return PaginatedCursorStream(
            self.fetcher,
            url,
            cursor,
            page_delay=self.config.page_delay,
            sleep=self.sleep,
        )

    def fetch_all(self, url: str, cursor: Cursor, limit: int = -1) -> list[Record]:
        """
        Collects records from every page.

        Args:
            url (str): Endpoint URL.
            cursor (Cursor): Identifier to start after.
            limit (int): Max number of records to collect. Defaults to -1 (no limit).

        Returns:
            list[Record]: Records in the order they were received.
        """
        self.logger.debug(f"Fetching {limit if limit != -1 else 'all'} records")

        records: list[Record] = []
        for page in self.paginate(url, cursor):
            for record in page:
                if limit != -1 and len(records) >= limit:
                    break
                records.append(record)
            if limit != -1 and len(records) >= limit:
                break

        self.logger.info(f"Finished fetching data, retrieved {len(records)} records")
        return records

    def close(self) -> None:
        if self._owns_transport:
            self.transport.close()  # type: ignore[attr-defined]

    def __enter__(self) -> "CursorPaginationClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
