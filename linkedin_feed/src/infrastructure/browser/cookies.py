"""Session cookies captured from a logged-in browser, prepared for Playwright"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

if TYPE_CHECKING:
    from linkedin_feed.src.infrastructure.loggers.base import RichLogger

_SAME_SITE_VALUES: dict[str, Literal['Lax', 'None', 'Strict']] = {
    'lax': 'Lax',
    'strict': 'Strict',
    'none': 'None',
    'no_restriction': 'None',
}


class BrowserCookie(BaseModel):
    """
    Cookie as exported by puppeteer or browser extensions.

    Extension spellings (`expirationDate`, `no_restriction`) are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    name: str
    value: str
    url: str | None = None
    domain: str | None = None
    path: str | None = None
    expires: float = Field(
        default=-1, validation_alias=AliasChoices('expires', 'expirationDate')
    )
    httpOnly: bool | None = None
    secure: bool | None = None
    sameSite: Literal['Lax', 'None', 'Strict'] | None = None

    @field_validator('expires', mode='before')
    @classmethod
    def _session_cookie(cls, value: Any) -> Any:
        return -1 if value is None else value

    @field_validator('sameSite', mode='before')
    @classmethod
    def _normalize_same_site(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SAME_SITE_VALUES.get(value.lower())
        return value

    def to_playwright(self, fallback_url: str) -> dict[str, Any]:
        """
        Playwright needs either `url` or `domain` + `path`, never both.

        Cookies without any scope are bound to `fallback_url`.
        """
        data = self.model_dump(exclude_none=True)
        if self.url is None and self.domain is None:
            data['url'] = fallback_url
        if 'url' in data:
            data.pop('domain', None)
            data.pop('path', None)
        else:
            data.setdefault('path', '/')
        return data


_COOKIES_ADAPTER = TypeAdapter(list[BrowserCookie])


def parse_cookies_json(raw: str | None, logger: RichLogger) -> list[BrowserCookie]:
    """
    Parse a JSON array of cookies.

    Cookies are optional, so any problem is reported and results in no cookies at all.
    """
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f'Cookies are not valid JSON, continuing without them ({e})')
        return []

    if not isinstance(data, list):
        logger.warning('Cookies must be a JSON array, continuing without them')
        return []

    try:
        return _COOKIES_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.warning(
            f'Cookies have unexpected structure, continuing without them ({e.error_count()} errors)'
        )
        return []
