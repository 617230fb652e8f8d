"""Post source which scrapes the rendered company feed"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from linkedin_feed.src.application.extraction.post_extractor import SKIP_REASON_EMPTY

if TYPE_CHECKING:
    from linkedin_feed.src.application.extraction.post_extractor import PostExtractor
    from linkedin_feed.src.application.post_source import FeedPayload
    from linkedin_feed.src.infrastructure.browser.page_loader import FeedPageSnapshot
    from linkedin_feed.src.infrastructure.loggers.base import RichLogger


class FeedPageLoader(Protocol):
    async def load(self) -> FeedPageSnapshot: ...


class BrowserPostSource:
    """
    Renders the feed page, extracts posts and keeps the first `max_posts` of them.

    Use it when API access is not available.
    """

    def __init__(
        self,
        *,
        page_loader: FeedPageLoader,
        extractor: PostExtractor,
        max_posts: int,
        logger: RichLogger,
    ) -> None:
        self.page_loader = page_loader
        self.extractor = extractor
        self.max_posts = max_posts
        self.logger = logger

    async def fetch(self) -> FeedPayload:
        snapshot = await self.page_loader.load()
        report = self.extractor.extract(snapshot.html, base_url=snapshot.url)

        failed = [node for node in report.skipped if node.reason != SKIP_REASON_EMPTY]
        for node in report.skipped:
            self.logger.debug(f'Skipped candidate #{node.index}: {node.reason}')

        self.logger.info(
            f'Found {report.candidates_total} candidates: '
            f'{len(report.posts)} posts, {len(report.skipped)} skipped '
            f'({report.skip_rate:.0%})'
        )
        if failed:
            self.logger.warning(
                f'{len(failed)} candidates failed to parse, the page markup may have changed'
            )

        posts = report.truncated(self.max_posts)
        if len(posts) < len(report.posts):
            self.logger.info(f'Keeping the first {len(posts)} posts')

        return [post.model_dump(mode='json') for post in posts]
