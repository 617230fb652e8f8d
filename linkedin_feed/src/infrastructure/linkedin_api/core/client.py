"""LinkedIn REST API client for reading organization posts."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from yarl import URL

from linkedin_feed.src.infrastructure.linkedin_api.core.endpoints import (
    RESTLI_PROTOCOL_VERSION,
    UGC_POSTS_URL,
)

if TYPE_CHECKING:
    from aiohttp import ClientResponse
    from aiohttp_retry import RetryClient


class LinkedInAPIError(Exception):
    """Raised when LinkedIn answers with a non-success status."""

    status: int
    body: str

    def __init__(self, status: int, body: str, action: str = 'Request') -> None:
        super().__init__(f'{action} failed: {status} {body}')
        self.status = status
        self.body = body


class LinkedInAPIUnauthorizedError(LinkedInAPIError):
    """Raised when the token is missing permissions, invalid or expired (401/403)."""


class LinkedInOAuthError(LinkedInAPIError):
    """Raised when the token exchange fails."""


def is_success(status: int) -> bool:
    return HTTPStatus.OK <= status < HTTPStatus.MULTIPLE_CHOICES


async def read_json_body(
    response: ClientResponse,
    action: str,
    error_cls: type[LinkedInAPIError] = LinkedInAPIError,
) -> Any:
    """Parse a successful response body, LinkedIn doesn't always send a JSON content type"""
    text = await response.text()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise error_cls(response.status, f'invalid JSON: {e}', action) from e


class LinkedInAPIClient:
    """
    Client for the organization posts endpoint.

    The session must not carry credentials, the token is passed explicitly per request.
    """

    def __init__(self, session: RetryClient) -> None:
        self.session = session

    async def get_organization_posts(
        self,
        access_token: str,
        org_urn: str,
        count: int,
    ) -> Any:
        """
        Request posts authored by the organization, most recently modified first.

        Only the first page (`count` items) is requested.
        The parsed response is returned as is.
        """
        action = 'Fetch posts'
        url = build_ugc_posts_url(org_urn, count)

        async with self.session.get(
            url,
            headers={
                'Authorization': f'Bearer {access_token}',
                'X-Restli-Protocol-Version': RESTLI_PROTOCOL_VERSION,
            },
        ) as response:
            if response.status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
                raise LinkedInAPIUnauthorizedError(
                    response.status, await response.text(), action
                )

            if not is_success(response.status):
                raise LinkedInAPIError(response.status, await response.text(), action)

            return await read_json_body(response, action)


def build_ugc_posts_url(org_urn: str, count: int) -> URL:
    """
    Build the query by hand, Rest.li expects `List(...)` with raw parentheses.

    Only the URN itself is percent-encoded.
    """
    authors = quote(org_urn, safe="!*'()")
    return URL(
        f'{UGC_POSTS_URL}?q=authors&authors=List({authors})'
        f'&sortBy=LAST_MODIFIED&count={count}',
        encoded=True,
    )
