from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field

type Cursor = int | str
type Record = Mapping[str, Any]
type Page = list[Record]

CURSOR_PARAM = "tid"


def with_cursor(url: str, cursor: Cursor) -> str:
    """Returns `url` with the cursor set as its `tid` query parameter.

    Any query string already present on the URL is kept, an existing `tid`
    is replaced.
    """
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != CURSOR_PARAM
    ]
    query.append((CURSOR_PARAM, str(cursor)))
    return urlunsplit(parts._replace(query=urlencode(query)))


class PageRequest(BaseModel):
    """A single attempt at fetching the page after `cursor`."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Endpoint URL without the cursor parameter")
    cursor: Cursor = Field(description="Fetch records after this identifier")
    attempt: int = Field(default=1, ge=1, description="1-based attempt number")

    @property
    def target(self) -> str:
        return with_cursor(self.url, self.cursor)

    def next_attempt(self) -> "PageRequest":
        return self.model_copy(update={"attempt": self.attempt + 1})
