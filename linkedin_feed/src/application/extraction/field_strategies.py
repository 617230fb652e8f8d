"""
Ranked extractor strategies for every field of a post.

Each strategy is a pure function taking a candidate node and returning the value
or None. Strategies of one field are tried in order and the first non-empty value wins.
Selectors follow the markup LinkedIn renders for company feeds, which changes often,
so every field keeps several fallbacks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, NamedTuple, TypeVar

from linkedin_feed.src.application.extraction.text_parsing import sanitize_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bs4 import Tag

T = TypeVar('T')

ACTIVITY_MARKER = 'urn:li:activity:'
FEED_UPDATE_URL = 'https://www.linkedin.com/feed/update/urn:li:activity:'

# Nodes which may hold a single post
CANDIDATE_SELECTOR = f'[data-urn*="{ACTIVITY_MARKER}"], article'

_ACTIVITY_ID_PATTERN = re.compile(r'urn:li:activity:(\d+)')


class ActivityRef(NamedTuple):
    """Identifier of a post and its permalink (may be relative)"""

    id: str
    url: str


def first_match(strategies: Sequence[Callable[[Tag], T | None]], node: Tag) -> T | None:
    """Run strategies in order, return the first non-empty value"""
    for strategy in strategies:
        value = strategy(node)
        if value:
            return value
    return None


# ------------------------------------------------------------------------------
# Strategy builders


def text_of(selector: str) -> Callable[[Tag], str | None]:
    """Whitespace-normalized text of the first element matching the selector"""

    def strategy(node: Tag) -> str | None:
        element = node.select_one(selector)
        if element is None:
            return None
        return sanitize_text(element.get_text()) or None

    return strategy


def attribute_of(selector: str, attribute: str) -> Callable[[Tag], str | None]:
    """Attribute value of the first element matching the selector"""

    def strategy(node: Tag) -> str | None:
        element = node.select_one(selector)
        if element is None:
            return None
        value = element.get(attribute)
        if not isinstance(value, str):
            return None
        return value.strip() or None

    return strategy


# ------------------------------------------------------------------------------
# Activity identifier


def activity_from_urn_attribute(node: Tag) -> ActivityRef | None:
    urn = node.get('data-urn')
    if not isinstance(urn, str) or ACTIVITY_MARKER not in urn:
        return None
    activity_id = urn.split(ACTIVITY_MARKER)[1]
    return ActivityRef(id=activity_id, url=f'{FEED_UPDATE_URL}{activity_id}')


def activity_from_permalink(node: Tag) -> ActivityRef | None:
    anchor = node.select_one(f'a[href*="/feed/update/{ACTIVITY_MARKER}"]')
    if anchor is None:
        return None
    href = anchor.get('href')
    if not isinstance(href, str) or not href:
        return None
    match = _ACTIVITY_ID_PATTERN.search(href)
    return ActivityRef(id=match.group(1) if match else '', url=href)


def all_image_sources(node: Tag) -> list[str]:
    """Sources of every image inside the node, unfiltered"""
    sources: list[str] = []
    for image in node.select('img'):
        src = image.get('src')
        if isinstance(src, str) and src.strip():
            sources.append(src.strip())
    return sources


# ------------------------------------------------------------------------------
# Strategy sets


@dataclass(frozen=True)
class FieldStrategies:
    """Ordered strategies for every field of a post"""

    activity: tuple[Callable[[Tag], ActivityRef | None], ...] = (
        activity_from_urn_attribute,
        activity_from_permalink,
    )
    author_name: tuple[Callable[[Tag], str | None], ...] = (
        text_of('.update-components-actor__name'),
        text_of('[data-test-id="actor-name"]'),
        text_of('a[href*="/company/"] span'),
        text_of('a[href*="/in/"] span'),
    )
    author_avatar: tuple[Callable[[Tag], str | None], ...] = (
        attribute_of('img.update-components-actor__avatar-image', 'src'),
        attribute_of('img[alt*="logo" i]', 'src'),
        attribute_of('img[src*="profile"]', 'src'),
    )
    date: tuple[Callable[[Tag], str | None], ...] = (
        text_of('.update-components-actor__sub-description'),
        text_of('time'),
        text_of('span[datetime]'),
    )
    text: tuple[Callable[[Tag], str | None], ...] = (
        text_of('.update-components-text'),
        text_of('div[dir="ltr"]'),
    )
    link_url: tuple[Callable[[Tag], str | None], ...] = (
        attribute_of('a.app-aware-link[href^="http"]', 'href'),
    )
    link_title: tuple[Callable[[Tag], str | None], ...] = (
        text_of('span[dir="ltr"]'),
        text_of('h3'),
        text_of('h4'),
    )
    link_description: tuple[Callable[[Tag], str | None], ...] = (
        text_of('p'),
        text_of('span.break-words'),
    )
    link_image: tuple[Callable[[Tag], str | None], ...] = (
        attribute_of('img[loading][src]', 'src'),
    )
    likes: tuple[Callable[[Tag], str | None], ...] = (
        text_of('[data-test-id="social-actions__reactions-count"]'),
        text_of('.social-details-social-counts__reactions-count'),
    )
    comments: tuple[Callable[[Tag], str | None], ...] = (
        text_of('[data-test-id="social-actions__comments-count"]'),
        text_of('a[data-control-name*="comments"]'),
    )
    reposts: tuple[Callable[[Tag], str | None], ...] = (
        text_of('[data-test-id="social-actions__reposts-count"]'),
    )
    image_sources: Callable[[Tag], list[str]] = all_image_sources
