"""Tests for the api post source"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from linkedin_feed.src.application.sources.api_post_source import LinkedInApiPostSource
from linkedin_feed.src.infrastructure.linkedin_api.core.client import LinkedInOAuthError
from linkedin_feed.src.infrastructure.yaml_configuration.config import (
    ApiCredentials,
    ClientCredentials,
)

ORG_URN = 'urn:li:organization:12345'
PAYLOAD = {'elements': [{'id': 'urn:li:ugcPost:1'}], 'paging': {'start': 0}}


def _make_source(
    auth: str | ClientCredentials = ClientCredentials('client-id', 'client-secret'),
) -> tuple[LinkedInApiPostSource, MagicMock, MagicMock, MagicMock]:
    api_client = MagicMock()
    api_client.get_organization_posts = AsyncMock(return_value=PAYLOAD)
    oauth_client = MagicMock()
    oauth_client.exchange_client_credentials = AsyncMock(return_value='exchanged-token')
    logger = MagicMock()

    source = LinkedInApiPostSource(
        api_client=api_client,
        oauth_client=oauth_client,
        credentials=ApiCredentials(org_urn=ORG_URN, auth=auth),
        page_size=50,
        logger=logger,
    )
    return source, api_client, oauth_client, logger


@pytest.mark.asyncio
async def test_provided_token_skips_exchange():
    source, api_client, oauth_client, _ = _make_source('provided-token')

    payload = await source.fetch()

    assert payload == PAYLOAD
    oauth_client.exchange_client_credentials.assert_not_awaited()
    api_client.get_organization_posts.assert_awaited_once_with(
        access_token='provided-token', org_urn=ORG_URN, count=50
    )


@pytest.mark.asyncio
async def test_exchanged_token_is_used_for_the_request():
    source, api_client, oauth_client, _ = _make_source()

    await source.fetch()

    oauth_client.exchange_client_credentials.assert_awaited_once_with(
        'client-id', 'client-secret'
    )
    assert api_client.get_organization_posts.await_args.kwargs['access_token'] == (
        'exchanged-token'
    )


@pytest.mark.asyncio
async def test_failed_exchange_is_reported_and_propagated():
    source, api_client, oauth_client, logger = _make_source()
    oauth_client.exchange_client_credentials.side_effect = LinkedInOAuthError(
        400, 'unsupported_grant_type', 'Token request'
    )

    with pytest.raises(LinkedInOAuthError):
        await source.fetch()

    api_client.get_organization_posts.assert_not_awaited()
    warnings = ' '.join(str(call.args[0]) for call in logger.warning.call_args_list)
    assert 'r_organization_social' in warnings
    assert 'LINKEDIN_ACCESS_TOKEN' in warnings

