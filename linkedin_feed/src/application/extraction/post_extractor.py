"""Maps a rendered company feed document into normalized post records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from linkedin_feed.src.application.extraction.field_strategies import (
    CANDIDATE_SELECTOR,
    FieldStrategies,
    first_match,
)
from linkedin_feed.src.application.extraction.text_parsing import parse_count
from linkedin_feed.src.domain.post import (
    Post,
    PostAuthor,
    PostCounts,
    PostLinkPreview,
)

if TYPE_CHECKING:
    from bs4 import Tag

# Icons, spacers and tracking pixels
_DECORATIVE_IMAGE_PATTERN = re.compile(
    r'data:image|sprite|transparent|gif|/emoticons/', re.IGNORECASE
)

SKIP_REASON_EMPTY = 'empty'


@dataclass(frozen=True)
class ExtractedNode:
    """Candidate node which produced a post"""

    post: Post


@dataclass(frozen=True)
class SkippedNode:
    """Candidate node which was dropped, with the reason why"""

    index: int
    reason: str


NodeResult = Union[ExtractedNode, SkippedNode]


@dataclass
class ExtractionReport:
    """Aggregated outcome of one extraction pass"""

    posts: list[Post] = field(default_factory=list)
    skipped: list[SkippedNode] = field(default_factory=list)
    candidates_total: int = 0

    @property
    def skip_rate(self) -> float:
        if self.candidates_total == 0:
            return 0.0
        return len(self.skipped) / self.candidates_total

    def truncated(self, max_posts: int) -> list[Post]:
        """First `max_posts` posts in document order"""
        return self.posts[:max_posts]


class PostExtractor:
    """
    Extracts posts from the HTML snapshot of a company feed.

    Every candidate node is processed independently, so one broken node
    never prevents the others from being extracted.
    """

    def __init__(
        self,
        default_author_name: str,
        strategies: FieldStrategies | None = None,
    ) -> None:
        self.default_author_name = default_author_name
        self.strategies = strategies or FieldStrategies()

    def extract(self, html: str, base_url: str) -> ExtractionReport:
        soup = BeautifulSoup(html, 'html.parser')
        candidates = soup.select(CANDIDATE_SELECTOR)

        report = ExtractionReport(candidates_total=len(candidates))
        for index, node in enumerate(candidates):
            result = self.extract_node(index, node, base_url)
            if isinstance(result, ExtractedNode):
                report.posts.append(result.post)
            else:
                report.skipped.append(result)

        return report

    def extract_node(self, index: int, node: Tag, base_url: str) -> NodeResult:
        try:
            post = self._build_post(node, base_url)
        except Exception as exc:  # noqa: BLE001 any failure only affects this node
            return SkippedNode(index=index, reason=f'error: {exc!r}')

        if not post.has_content():
            return SkippedNode(index=index, reason=SKIP_REASON_EMPTY)

        return ExtractedNode(post=post)

    def _build_post(self, node: Tag, base_url: str) -> Post:
        s = self.strategies

        def resolve(url: str | None) -> str:
            return urljoin(base_url, url) if url else ''

        activity = first_match(s.activity, node)

        images = [
            src
            for src in (resolve(raw) for raw in s.image_sources(node))
            if src and not _DECORATIVE_IMAGE_PATTERN.search(src)
        ]

        link: PostLinkPreview | None = None
        link_url = first_match(s.link_url, node)
        if link_url:
            link_url = resolve(link_url)
            link = PostLinkPreview(
                url=link_url,
                title=first_match(s.link_title, node) or link_url,
                description=first_match(s.link_description, node) or '',
                image=resolve(first_match(s.link_image, node)),
            )

        return Post(
            id=activity.id if activity else '',
            author=PostAuthor(
                name=first_match(s.author_name, node) or self.default_author_name,
                avatar=resolve(first_match(s.author_avatar, node)),
            ),
            date=first_match(s.date, node) or '',
            text=first_match(s.text, node) or '',
            images=images,
            link=link,
            counts=PostCounts(
                likes=parse_count(first_match(s.likes, node)),
                comments=parse_count(first_match(s.comments, node)),
                reposts=parse_count(first_match(s.reposts, node)),
            ),
            url=resolve(activity.url) if activity else '',
        )
