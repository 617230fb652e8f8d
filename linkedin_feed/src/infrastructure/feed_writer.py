"""Persists the retrieved feed as a pretty-printed JSON file"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import aiofiles

if TYPE_CHECKING:
    from pathlib import Path

    from linkedin_feed.src.application.post_source import FeedPayload


async def write_feed(payload: FeedPayload, destination: Path) -> None:
    """Overwrite the destination with the payload, no backup of the previous content"""
    content = json.dumps(payload, indent=2, ensure_ascii=False)

    destination.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(destination, mode='w', encoding='utf-8') as file:
        await file.write(content)
