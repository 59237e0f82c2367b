import pytest

from cursorpager.config import PaginationConfig


class RecordingSleep:
    """Fake delay primitive that records every requested duration."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class FakeTransport:
    """Transport answering from a dict of URL -> list of outcomes.

    Each GET consumes the next outcome for its URL. Exceptions are raised,
    anything else is returned.
    """

    def __init__(self, responses):
        self.responses = {url: list(outcomes) for url, outcomes in responses.items()}
        self.calls = []

    def get(self, url):
        self.calls.append(url)
        outcome = self.responses[url].pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def base_url():
    return "https://example.com/api/trades"


@pytest.fixture
def pagination_config():
    return PaginationConfig(
        max_retries=3, retry_delay=0.5, request_timeout=1.0, page_delay=0.2
    )


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_transport():
    return FakeTransport
