"""Tests for session cookie parsing"""

import json
from unittest.mock import MagicMock

from linkedin_feed.src.infrastructure.browser.cookies import (
    BrowserCookie,
    parse_cookies_json,
)

HOME_URL = 'https://www.linkedin.com/'


def test_parses_puppeteer_export():
    raw = json.dumps(
        [
            {
                'name': 'li_at',
                'value': 'secret',
                'domain': '.linkedin.com',
                'path': '/',
                'expires': 1893456000,
                'httpOnly': True,
                'secure': True,
                'sameSite': 'None',
                'size': 42,
            }
        ]
    )
    logger = MagicMock()

    cookies = parse_cookies_json(raw, logger)

    assert len(cookies) == 1
    assert cookies[0].name == 'li_at'
    assert cookies[0].expires == 1893456000
    assert cookies[0].sameSite == 'None'
    logger.warning.assert_not_called()


def test_parses_extension_export():
    raw = json.dumps(
        [
            {
                'name': 'JSESSIONID',
                'value': 'ajax:1',
                'domain': '.www.linkedin.com',
                'expirationDate': 1893456000.5,
                'sameSite': 'no_restriction',
                'session': False,
            }
        ]
    )

    cookies = parse_cookies_json(raw, MagicMock())

    assert cookies[0].expires == 1893456000.5
    assert cookies[0].sameSite == 'None'


def test_unknown_same_site_is_dropped():
    cookie = BrowserCookie(name='a', value='b', sameSite='unspecified')

    assert cookie.sameSite is None


def test_empty_input_gives_no_cookies():
    logger = MagicMock()

    assert parse_cookies_json(None, logger) == []
    assert parse_cookies_json('', logger) == []
    logger.warning.assert_not_called()


def test_invalid_json_gives_no_cookies():
    logger = MagicMock()

    assert parse_cookies_json('[{"name": ', logger) == []
    logger.warning.assert_called_once()


def test_non_array_gives_no_cookies():
    logger = MagicMock()

    assert parse_cookies_json('{"name": "li_at", "value": "x"}', logger) == []
    logger.warning.assert_called_once()


def test_wrong_structure_gives_no_cookies():
    logger = MagicMock()

    assert parse_cookies_json('[{"value": "missing name"}]', logger) == []
    logger.warning.assert_called_once()


def test_domain_cookie_for_playwright():
    cookie = BrowserCookie(name='li_at', value='secret', domain='.linkedin.com')

    data = cookie.to_playwright(HOME_URL)

    assert data == {
        'name': 'li_at',
        'value': 'secret',
        'domain': '.linkedin.com',
        'path': '/',
        'expires': -1,
    }


def test_cookie_without_scope_is_bound_to_fallback_url():
    cookie = BrowserCookie(name='li_at', value='secret', path='/feed')

    data = cookie.to_playwright(HOME_URL)

    assert data['url'] == HOME_URL
    assert 'domain' not in data
    assert 'path' not in data


def test_url_cookie_drops_domain_and_path():
    cookie = BrowserCookie(
        name='li_at',
        value='secret',
        url='https://www.linkedin.com/',
        domain='.linkedin.com',
        path='/',
    )

    data = cookie.to_playwright(HOME_URL)

    assert data['url'] == 'https://www.linkedin.com/'
    assert 'domain' not in data
    assert 'path' not in data
