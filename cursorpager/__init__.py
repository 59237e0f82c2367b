from .client import CursorPaginationClient
from .config import ConfigReader, PaginationConfig, load_config
from .exceptions import (
    CursorPagerError,
    RequestTimeoutError,
    RetriesExhaustedError,
    TransportError,
)
from .models import PageRequest
from .pagination import EMPTY_SENTINEL, PaginatedCursorStream, trailing_identifier
from .retry import RetryingFetcher
from .timed import TimedCaller
from .transport import RequestsTransport, Transport

__version__ = "0.1.0"

__all__ = [
    "CursorPaginationClient",
    "PaginatedCursorStream",
    "RetryingFetcher",
    "TimedCaller",
    "Transport",
    "RequestsTransport",
    "PaginationConfig",
    "ConfigReader",
    "load_config",
    "PageRequest",
    "EMPTY_SENTINEL",
    "trailing_identifier",
    "CursorPagerError",
    "TransportError",
    "RequestTimeoutError",
    "RetriesExhaustedError",
]
