"""Tests for assembling the post source selected in the configuration"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from linkedin_feed.src.application.di.app_environment import AppEnvironment
from linkedin_feed.src.application.post_source import FeedSourceKind
from linkedin_feed.src.application.sources.api_post_source import LinkedInApiPostSource
from linkedin_feed.src.application.sources.browser_post_source import BrowserPostSource
from linkedin_feed.src.infrastructure.browser.page_loader import PlaywrightFeedPageLoader
from linkedin_feed.src.infrastructure.yaml_configuration.config import Config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    for name in ('FEED_SOURCE', 'LINKEDIN_COOKIES_JSON', 'MAX_POSTS', 'LINKEDIN_COMPANY_URL'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _environment(**overrides) -> AppEnvironment:
    config = Config()
    for name, value in overrides.items():
        setattr(config, name, value)
    return AppEnvironment(AppEnvironment.AppConfig(config=config, logger=MagicMock()))


def test_retry_client_requires_entered_environment():
    with pytest.raises(RuntimeError):
        _ = _environment().retry_client


@pytest.mark.asyncio
async def test_builds_browser_source():
    async with _environment(source=FeedSourceKind.browser, max_posts=4) as environment:
        source = environment.build_post_source()

    assert isinstance(source, BrowserPostSource)
    assert source.max_posts == 4
    assert isinstance(source.page_loader, PlaywrightFeedPageLoader)
    assert source.page_loader.cookies == []


@pytest.mark.asyncio
async def test_builds_api_source():
    async with _environment(
        source=FeedSourceKind.api,
        org_urn='urn:li:organization:1',
        access_token='token',
        api_page_size=25,
    ) as environment:
        source = environment.build_post_source()

    assert isinstance(source, LinkedInApiPostSource)
    assert source.page_size == 25
    assert source.credentials.org_urn == 'urn:li:organization:1'
    assert source.credentials.auth == 'token'


@pytest.mark.asyncio
async def test_session_is_released_on_exit():
    environment = _environment()

    async with environment:
        assert environment.retry_client is not None

    with pytest.raises(RuntimeError):
        _ = environment.retry_client
