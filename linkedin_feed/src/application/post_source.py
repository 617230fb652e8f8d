"""Common capability of every strategy that can retrieve company posts."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, Union

# Raw upstream payload (api) or a list of normalized post records (browser)
FeedPayload = Union[dict[str, Any], list[dict[str, Any]]]


class FeedSourceKind(str, Enum):
    """Available retrieval strategies"""

    api = 'api'
    browser = 'browser'


class PostSource(Protocol):
    """Something which can produce a JSON-serializable feed in a single pass."""

    async def fetch(self) -> FeedPayload: ...
