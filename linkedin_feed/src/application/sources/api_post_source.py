"""Post source backed by the official LinkedIn REST API"""

from __future__ import annotations

from typing import TYPE_CHECKING

from linkedin_feed.src.infrastructure.linkedin_api.core.client import (
    LinkedInOAuthError,
)

if TYPE_CHECKING:
    from linkedin_feed.src.application.post_source import FeedPayload
    from linkedin_feed.src.infrastructure.linkedin_api.core.client import (
        LinkedInAPIClient,
    )
    from linkedin_feed.src.infrastructure.linkedin_api.core.oauth_client import (
        LinkedInOAuthClient,
    )
    from linkedin_feed.src.infrastructure.loggers.base import RichLogger
    from linkedin_feed.src.infrastructure.yaml_configuration.config import (
        ApiCredentials,
    )


class LinkedInApiPostSource:
    """
    Fetches the first page of organization posts and passes the payload through untouched.

    A pre-issued access token takes precedence over the client credentials exchange.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        api_client: LinkedInAPIClient,
        oauth_client: LinkedInOAuthClient,
        credentials: ApiCredentials,
        page_size: int,
        logger: RichLogger,
    ) -> None:
        self.api_client = api_client
        self.oauth_client = oauth_client
        self.credentials = credentials
        self.page_size = page_size
        self.logger = logger

    async def resolve_access_token(self) -> str:
        auth = self.credentials.auth
        if isinstance(auth, str):
            self.logger.info('Using the provided access token')
            return auth

        self.logger.info('Attempting client_credentials token exchange...')
        try:
            token = await self.oauth_client.exchange_client_credentials(
                auth.client_id,
                auth.client_secret,
            )
        except LinkedInOAuthError as e:
            self.logger.warning(f'Client credentials token exchange failed: {e}')
            self.logger.warning(
                'If this happens, create an OAuth access token with '
                '[bold]r_organization_social[/bold] and provide it as LINKEDIN_ACCESS_TOKEN'
            )
            raise

        self.logger.success('Token obtained via client_credentials')
        return token

    async def fetch(self) -> FeedPayload:
        token = await self.resolve_access_token()
        self.logger.info(f'Fetching posts of [bold]{self.credentials.org_urn}[/bold]')
        return await self.api_client.get_organization_posts(
            access_token=token,
            org_urn=self.credentials.org_urn,
            count=self.page_size,
        )
