"""Implements the use case of retrieving the company feed and saving it to a file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from linkedin_feed.src.infrastructure.feed_writer import write_feed

if TYPE_CHECKING:
    from pathlib import Path

    from linkedin_feed.src.application.post_source import PostSource
    from linkedin_feed.src.infrastructure.loggers.base import RichLogger


class FetchFeedUseCase:
    """
    Retrieve the feed from a source and persist it.

    The file is only written once the retrieval has fully succeeded,
    a failed run leaves the previous file untouched.
    """

    def __init__(
        self,
        source: PostSource,
        destination: Path,
        logger: RichLogger,
    ) -> None:
        self.source = source
        self.destination = destination
        self.logger = logger

    async def execute(self) -> int:
        """Return the number of written posts"""
        payload = await self.source.fetch()

        await write_feed(payload, self.destination)

        count = 0
        if isinstance(payload, list):
            count = len(payload)
        elif isinstance(payload, dict) and isinstance(payload.get('elements'), list):
            # Rest.li collection response
            count = len(payload['elements'])

        self.logger.success(
            f'Wrote {count} posts to [green bold]{self.destination.absolute()}[/green bold]'
        )
        return count
