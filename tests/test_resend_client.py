import json

import httpx
import pytest

from src.integrations.clients.real_http.resend import ResendClient
from src.integrations.contracts.messaging import ContactPayload, SegmentOption
from src.integrations.errors import ConfigurationError, UnexpectedResponse, UpstreamRejected
from src.utils.config_loader import ResendConfig


def _client(handler, api_key="re_test"):
    return ResendClient(ResendConfig(api_key=api_key), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_list_segments_uses_bearer_auth():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/segments"
        assert request.headers["Authorization"] == "Bearer re_test"
        return httpx.Response(
            200,
            json={"object": "list", "data": [{"id": "seg_1", "name": "Newsletter"}, {"id": "seg_2"}]},
        )

    segments = await _client(handler).list_segments()

    assert segments == [SegmentOption(id="seg_1", name="Newsletter")]


@pytest.mark.asyncio
async def test_create_contact_posts_subscribed_contact():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"object": "contact", "id": "c_1"})

    contact_id = await _client(handler).create_contact(
        ContactPayload(email="jane@example.com", first_name="Jane", last_name="Q Public")
    )

    assert contact_id == "c_1"
    assert seen["path"] == "/contacts"
    assert seen["body"] == {
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Q Public",
        "unsubscribed": False,
    }


@pytest.mark.asyncio
async def test_create_contact_without_id_is_unexpected():
    client = _client(lambda request: httpx.Response(200, json={"object": "contact"}))

    with pytest.raises(UnexpectedResponse):
        await client.create_contact(ContactPayload(email="a@b.co", first_name="A", last_name=""))


@pytest.mark.asyncio
async def test_add_contact_to_segment_path_and_error_message():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(404, json={"statusCode": 404, "name": "not_found", "message": "Segment not found"})

    with pytest.raises(UpstreamRejected) as exc:
        await _client(handler).add_contact_to_segment("c_1", "seg_9")

    assert paths == ["/contacts/c_1/segments/seg_9"]
    assert exc.value.status_code == 404
    assert exc.value.message == "Segment not found"


@pytest.mark.asyncio
async def test_add_contact_to_segment_accepts_empty_body():
    client = _client(lambda request: httpx.Response(200))
    await client.add_contact_to_segment("c_1", "seg_1")


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        await _client(lambda request: httpx.Response(200, json={}), api_key=None).list_segments()
