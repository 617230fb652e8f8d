"""Access token acquisition with the OAuth client credentials grant"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from linkedin_feed.src.infrastructure.linkedin_api.core.client import (
    LinkedInOAuthError,
    is_success,
    read_json_body,
)
from linkedin_feed.src.infrastructure.linkedin_api.core.endpoints import (
    OAUTH_TOKEN_URL,
)
from linkedin_feed.src.infrastructure.linkedin_api.models.oauth import (
    ClientCredentialsTokenResponse,
)

if TYPE_CHECKING:
    from aiohttp_retry import RetryClient


class LinkedInOAuthClient:
    """
    Exchanges a client id/secret pair for a bearer token.

    The token is requested once per process, it's neither cached nor refreshed.
    """

    def __init__(self, session: RetryClient) -> None:
        self.session = session

    async def exchange_client_credentials(
        self, client_id: str, client_secret: str
    ) -> str:
        """Request a token and return it, raise LinkedInOAuthError on any failure"""
        action = 'Token request'
        form_data = {
            'grant_type': 'client_credentials',
            'client_id': client_id,
            'client_secret': client_secret,
        }

        async with self.session.post(
            OAUTH_TOKEN_URL,
            data=form_data,
            headers={'Content-Type': 'application/x-www-form-urlencoded'},
        ) as response:
            if not is_success(response.status):
                raise LinkedInOAuthError(response.status, await response.text(), action)

            data = await read_json_body(response, action, LinkedInOAuthError)
            try:
                token = ClientCredentialsTokenResponse.model_validate(data)
            except ValidationError as e:
                raise LinkedInOAuthError(
                    response.status, f'unexpected token response: {e}', action
                ) from e

            return token.access_token
