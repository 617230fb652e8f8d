"""Owns the long-lived resources of one run and assembles the selected post source."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import aiohttp
from aiohttp_retry import ExponentialRetry, RetryClient

from linkedin_feed.src.application.extraction.post_extractor import PostExtractor
from linkedin_feed.src.application.post_source import FeedSourceKind
from linkedin_feed.src.application.sources.api_post_source import LinkedInApiPostSource
from linkedin_feed.src.application.sources.browser_post_source import BrowserPostSource
from linkedin_feed.src.infrastructure.browser.cookies import parse_cookies_json
from linkedin_feed.src.infrastructure.browser.page_loader import (
    PlaywrightFeedPageLoader,
)
from linkedin_feed.src.infrastructure.linkedin_api.core.client import LinkedInAPIClient
from linkedin_feed.src.infrastructure.linkedin_api.core.oauth_client import (
    LinkedInOAuthClient,
)
from linkedin_feed.src.infrastructure.yaml_configuration.config import (
    require_api_credentials,
)

if TYPE_CHECKING:
    from types import TracebackType

    from linkedin_feed.src.application.post_source import PostSource
    from linkedin_feed.src.infrastructure.loggers.base import RichLogger
    from linkedin_feed.src.infrastructure.yaml_configuration.config import Config

# Only connection level failures are retried, HTTP statuses are final
RETRYABLE_EXCEPTIONS: set[type[Exception]] = {
    aiohttp.ClientConnectorError,
    aiohttp.ClientOSError,
    aiohttp.ServerDisconnectedError,
}


class AppEnvironment:
    """
    Async context manager with the HTTP session shared by the api clients.

    Resources are released on exit, whether the run succeeded or not.
    """

    @dataclass
    class AppConfig:
        config: Config
        logger: RichLogger

    def __init__(self, config: AppConfig) -> None:
        self.config = config.config
        self.logger = config.logger
        self._retry_client: RetryClient | None = None

    async def __aenter__(self) -> AppEnvironment:
        session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.http_timeout_seconds),
        )
        self._retry_client = RetryClient(
            client_session=session,
            retry_options=ExponentialRetry(
                attempts=self.config.http_retry_attempts,
                exceptions=RETRYABLE_EXCEPTIONS,
                retry_all_server_errors=False,
            ),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._retry_client is not None:
            await self._retry_client.close()
            self._retry_client = None

    @property
    def retry_client(self) -> RetryClient:
        if self._retry_client is None:
            msg = 'AppEnvironment must be entered before use'
            raise RuntimeError(msg)
        return self._retry_client

    def build_post_source(self) -> PostSource:
        """Create the source selected in the configuration"""
        if self.config.source == FeedSourceKind.api:
            return LinkedInApiPostSource(
                api_client=LinkedInAPIClient(self.retry_client),
                oauth_client=LinkedInOAuthClient(self.retry_client),
                credentials=require_api_credentials(self.config),
                page_size=self.config.api_page_size,
                logger=self.logger,
            )

        return BrowserPostSource(
            page_loader=PlaywrightFeedPageLoader(
                company_url=self.config.company_url,
                scroll_timeout_ms=self.config.scroll_timeout_ms,
                cookies=parse_cookies_json(self.config.cookies_json, self.logger),
                logger=self.logger,
                headless=self.config.headless,
            ),
            extractor=PostExtractor(
                default_author_name=self.config.default_author_name,
            ),
            max_posts=self.config.max_posts,
            logger=self.logger,
        )
