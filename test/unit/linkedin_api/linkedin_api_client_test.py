"""Tests for the organization posts endpoint client"""

import pytest
from helpers.fakes import make_session

from linkedin_feed.src.infrastructure.linkedin_api.core.client import (
    LinkedInAPIClient,
    LinkedInAPIError,
    LinkedInAPIUnauthorizedError,
    build_ugc_posts_url,
)

ORG_URN = 'urn:li:organization:12345'


def test_ugc_posts_url_keeps_restli_syntax():
    url = build_ugc_posts_url(ORG_URN, 50)

    assert str(url) == (
        'https://api.linkedin.com/v2/ugcPosts?q=authors'
        '&authors=List(urn%3Ali%3Aorganization%3A12345)'
        '&sortBy=LAST_MODIFIED&count=50'
    )


@pytest.mark.asyncio
async def test_returns_payload_untouched():
    body = '{"elements": [{"id": "urn:li:ugcPost:1", "custom": {"nested": true}}], "paging": {"count": 50}}'
    session = make_session(200, body)
    client = LinkedInAPIClient(session)

    payload = await client.get_organization_posts(
        access_token='token-123', org_urn=ORG_URN, count=50
    )

    assert payload == {
        'elements': [{'id': 'urn:li:ugcPost:1', 'custom': {'nested': True}}],
        'paging': {'count': 50},
    }


@pytest.mark.asyncio
async def test_sends_bearer_token_and_protocol_header():
    session = make_session(200, '{"elements": []}')
    client = LinkedInAPIClient(session)

    await client.get_organization_posts(access_token='token-123', org_urn=ORG_URN, count=10)

    session.get.assert_called_once()
    args, kwargs = session.get.call_args
    assert args[0] == build_ugc_posts_url(ORG_URN, 10)
    assert kwargs['headers'] == {
        'Authorization': 'Bearer token-123',
        'X-Restli-Protocol-Version': '2.0.0',
    }


@pytest.mark.asyncio
async def test_server_error_carries_status_and_body():
    session = make_session(500, 'Internal failure')
    client = LinkedInAPIClient(session)

    with pytest.raises(LinkedInAPIError) as exc_info:
        await client.get_organization_posts(access_token='t', org_urn=ORG_URN, count=50)

    assert not isinstance(exc_info.value, LinkedInAPIUnauthorizedError)
    assert exc_info.value.status == 500
    assert exc_info.value.body == 'Internal failure'
    assert '500' in str(exc_info.value)
    assert 'Internal failure' in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize('status', [401, 403])
async def test_unauthorized_statuses(status: int):
    session = make_session(status, '{"message": "Not enough permissions"}')
    client = LinkedInAPIClient(session)

    with pytest.raises(LinkedInAPIUnauthorizedError) as exc_info:
        await client.get_organization_posts(access_token='t', org_urn=ORG_URN, count=50)

    assert exc_info.value.status == status
    assert 'Not enough permissions' in exc_info.value.body


@pytest.mark.asyncio
async def test_invalid_json_body_is_an_api_error():
    session = make_session(200, '<html>maintenance</html>')
    client = LinkedInAPIClient(session)

    with pytest.raises(LinkedInAPIError, match='invalid JSON'):
        await client.get_organization_posts(access_token='t', org_urn=ORG_URN, count=50)
