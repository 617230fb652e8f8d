"""Normalized post record produced from the rendered company feed."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class PostAuthor(BaseModel):
    """Who published the post"""

    name: str
    avatar: str = ''


class PostLinkPreview(BaseModel):
    """Preview card of an external link attached to the post"""

    url: str
    title: str
    description: str = ''
    image: str = ''


class PostCounts(BaseModel):
    """Social counters, zero when they couldn't be read"""

    likes: int = 0
    comments: int = 0
    reposts: int = 0


class Post(BaseModel):
    """
    Post record written to the feed file.

    `images` keeps the first occurrence of each URL in document order.
    """

    id: str = ''
    author: PostAuthor
    date: str = ''
    text: str = ''
    images: list[str] = []
    link: PostLinkPreview | None = None
    counts: PostCounts = PostCounts()
    url: str = ''

    @field_validator('images')
    @classmethod
    def _unique_images(cls, images: list[str]) -> list[str]:
        return list(dict.fromkeys(images))

    def has_content(self) -> bool:
        """Only posts with text or at least one image are worth keeping"""
        return bool(self.text) or len(self.images) > 0
