"""Helpers for cleaning up text scraped from rendered markup"""

from __future__ import annotations

import re

_COUNT_PATTERN = re.compile(r'[0-9,.]+')
# 1.234 or 12.345.678: dots used as thousands separators
_DOTTED_THOUSANDS_PATTERN = re.compile(r'^[0-9]{1,3}(?:\.[0-9]{3})+$')


def sanitize_text(text: str | None) -> str:
    """Collapse every whitespace run into a single space and trim the ends"""
    if not text:
        return ''
    return ' '.join(text.split())


def parse_count(text: str | None) -> int:
    """
    Extract a counter value from a localized label like `1,234 likes`.

    Only the first run of digits and separators is considered.
    Commas are always thousands separators, dots are treated as such only when they
    split groups of exactly three digits, otherwise the value is truncated to int.
    Anything that doesn't look like a number gives 0.
    """
    if not text:
        return 0

    match = _COUNT_PATTERN.search(text)
    if match is None:
        return 0

    raw = match.group(0).replace(',', '')
    if _DOTTED_THOUSANDS_PATTERN.match(raw):
        raw = raw.replace('.', '')

    try:
        if '.' in raw:
            return int(float(raw))
        return int(raw)
    except ValueError:
        return 0
