from __future__ import annotations

import asyncio
import json
from datetime import date

import httpx
import pytest

from apex_mcp.apex.client import ApexClient
from apex_mcp.config import Credentials
from apex_mcp.errors import ConfigurationError, ToolNotFoundError, ToolValidationError
from apex_mcp.tools import catalog
from apex_mcp.tools.registry import NO_FIELDS_TO_UPDATE, ToolRegistry
from apex_mcp.tools.tweet import GET_TWEET

from tests.conftest import RecordingHandler


EXPECTED_ROUTES = {
    "get_tweet": ("GET", "/apex/tweet/{id}/details"),
    "generate_reply": ("GET", "/apex/reply"),
    "generate_reply_to_tweet": ("GET", "/apex/tweet/{id}/reply"),
    "post_tweet": ("POST", "/apex/tweet"),
    "post_reply_to_tweet": ("POST", "/apex/tweet/{tweet_id}/reply"),
    "search_tweets": ("GET", "/apex/tweet/search"),
    "add_list_member": ("POST", "/apex/list/{listId}/member"),
    "get_list_members": ("GET", "/apex/list/{listId}/member"),
    "create_list": ("POST", "/apex/list"),
    "get_user_lists": ("GET", "/apex/list"),
    "delete_list": ("DELETE", "/apex/list/{listId}"),
    "get_list": ("GET", "/apex/list/{listId}"),
    "update_list": ("PUT", "/apex/list/{listId}"),
}


def _fail_on_request(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"Unexpected request {request.method} {request.url}")


def test_catalog_matches_routes() -> None:
    routes = {spec.name: (spec.method, spec.path) for spec in catalog()}
    assert routes == EXPECTED_ROUTES


def test_list_tools_advertises_alias_names(make_registry) -> None:
    registry = make_registry(_fail_on_request)
    tools = {tool["name"]: tool for tool in registry.list_tools()}
    search_props = tools["search_tweets"]["inputSchema"]["properties"]
    assert {"fromUsers", "minLikes", "list", "startDate"} <= set(search_props)
    update_schema = tools["update_list"]["inputSchema"]
    assert set(update_schema["properties"]) == {"listId", "name", "description", "private"}
    assert update_schema["required"] == ["listId"]
    assert registry.list_resources() == []
    assert registry.list_prompts() == []


def test_search_tweets_repeats_array_keys(make_registry) -> None:
    payload = [{"id": "1", "text": "hello"}, {"id": "2", "text": "world"}]
    handler = RecordingHandler(lambda request: httpx.Response(200, json=payload))
    registry = make_registry(handler)

    result = asyncio.run(registry.call("search_tweets", {"fromUsers": ["alice", "bob"], "minLikes": 100}))

    request = handler.last
    assert request.method == "GET"
    assert request.url.path == "/apex/tweet/search"
    assert request.url.query == b"fromUsers=alice&fromUsers=bob&minLikes=100"
    assert request.headers["Authorization"] == "Bearer token-123"
    assert request.headers["Consumer-Type"] == "mcp"
    assert result.is_error is False
    assert result.text == json.dumps(payload, indent=2)


def test_search_tweets_formats_dates_and_booleans(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("search_tweets", {
        "startDate": date(2025, 7, 25),
        "endDate": "2025-07-30",
        "top": True,
        "hashtags": [],
        "list": "L9",
    }))

    params = handler.last.url.params
    assert params["startDate"] == "2025-07-25"
    assert params["endDate"] == "2025-07-30"
    assert params["top"] == "true"
    assert params["list"] == "L9"
    assert "hashtags" not in params


def test_post_tweet_sends_json_body(make_registry) -> None:
    handler = RecordingHandler(lambda request: httpx.Response(201, json={"id": "99"}))
    registry = make_registry(handler)

    result = asyncio.run(registry.call("post_tweet", {"username": "u", "text": "hi"}))

    request = handler.last
    assert request.method == "POST"
    assert request.url.path == "/apex/tweet"
    assert request.url.query == b""
    assert request.content == b'{"username":"u","text":"hi"}'
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(result.text) == {"id": "99"}


def test_post_reply_uses_tweet_id_in_path(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("post_reply_to_tweet", {"tweet_id": "t1", "text": "nice"}))

    assert handler.last.url.path == "/apex/tweet/t1/reply"
    assert json.loads(handler.last.content) == {"text": "nice"}


def test_generate_reply_is_a_get_with_image_url_entries(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("generate_reply", {"text": "hello", "image_urls": ["a.png", "b.png"]}))

    request = handler.last
    assert request.method == "GET"
    assert request.url.path == "/apex/reply"
    assert request.url.params.multi_items() == [
        ("text", "hello"),
        ("image_url", "a.png"),
        ("image_url", "b.png"),
    ]
    assert request.headers["accept"] == "application/json"
    assert request.content == b""
    assert "Content-Type" not in request.headers


def test_get_list_members_omits_absent_cursor(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("get_list_members", {"listId": "L1", "maxResults": 5}))

    assert handler.last.url.path == "/apex/list/L1/member"
    assert handler.last.url.query == b"maxResults=5"


def test_get_user_lists_without_paging_has_no_query(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("get_user_lists", {}))

    assert handler.last.url.path == "/apex/list"
    assert handler.last.url.query == b""


def test_create_list_sends_only_supplied_fields(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("create_list", {"name": "builders", "private": True}))

    assert handler.last.method == "POST"
    assert json.loads(handler.last.content) == {"name": "builders", "private": True}


def test_add_list_member_body(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("add_list_member", {"listId": "L1", "userId": "U7"}))

    assert handler.last.url.path == "/apex/list/L1/member"
    assert json.loads(handler.last.content) == {"userId": "U7"}


def test_update_list_without_fields_skips_network(make_registry) -> None:
    registry = make_registry(_fail_on_request)

    result = asyncio.run(registry.call("update_list", {"listId": "L1"}))

    assert result.is_error is False
    assert NO_FIELDS_TO_UPDATE in result.text


def test_update_list_keeps_false_values(make_registry) -> None:
    handler = RecordingHandler(lambda request: httpx.Response(204))
    registry = make_registry(handler)

    result = asyncio.run(registry.call("update_list", {"listId": "L1", "private": False}))

    assert handler.last.method == "PUT"
    assert handler.last.content == b'{"private":false}'
    assert json.loads(result.text) == {"success": True}


def test_delete_list_has_no_body(make_registry) -> None:
    handler = RecordingHandler(lambda request: httpx.Response(204))
    registry = make_registry(handler)

    asyncio.run(registry.call("delete_list", {"listId": "L1"}))

    assert handler.last.method == "DELETE"
    assert handler.last.content == b""
    assert "Content-Type" not in handler.last.headers


def test_unknown_arguments_are_dropped(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("get_tweet", {"id": "123", "verbose": True}))

    assert handler.last.url.path == "/apex/tweet/123/details"
    assert handler.last.url.query == b""


def test_validation_fails_before_network(make_registry) -> None:
    registry = make_registry(_fail_on_request)

    with pytest.raises(ToolValidationError) as exc_info:
        asyncio.run(registry.call("post_reply_to_tweet", {"tweet_id": "t1"}))
    assert exc_info.value.details["tool"] == "post_reply_to_tweet"

    with pytest.raises(ToolValidationError):
        asyncio.run(registry.call("get_user_lists", {"maxResults": 0}))
    with pytest.raises(ToolValidationError):
        asyncio.run(registry.call("create_list", {"name": "x" * 26}))
    with pytest.raises(ToolValidationError):
        asyncio.run(registry.call("search_tweets", {"fromUsers": "alice"}))


def test_unknown_tool(make_registry) -> None:
    registry = make_registry(_fail_on_request)
    with pytest.raises(ToolNotFoundError):
        asyncio.run(registry.call("like_tweet", {}))


def test_remote_404_becomes_error_result(make_registry) -> None:
    registry = make_registry(lambda request: httpx.Response(404))

    result = asyncio.run(registry.call("get_list", {"listId": "missing"}))

    assert result.is_error is True
    assert result.text.startswith("Error:")
    assert "404" in result.text


def test_network_failure_becomes_error_result(make_registry) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    registry = make_registry(refuse)

    result = asyncio.run(registry.call("get_tweet", {"id": "1"}))

    assert result.is_error is True
    assert result.text.startswith("Error: Request to https://api.test/apex/tweet/1/details failed")


def test_enabled_allow_list(make_registry) -> None:
    registry = make_registry(_fail_on_request, enabled=["get_tweet", "get_list"])
    assert registry.names() == ["get_tweet", "get_list"]
    with pytest.raises(ToolNotFoundError):
        registry.get("post_tweet")


def test_duplicate_specs_rejected(credentials: Credentials) -> None:
    with pytest.raises(ValueError):
        ToolRegistry(credentials, specs=[GET_TWEET, GET_TWEET])


def test_registries_keep_their_own_credentials() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(f"{request.url.host} {request.headers['Authorization']}")
        return httpx.Response(200, json={})

    registries = []
    for token, url in (("a", "https://one.test"), ("b", "https://two.test")):
        creds = Credentials.create(token, url)
        client = ApexClient(creds, transport=httpx.MockTransport(handler))
        registries.append(ToolRegistry(creds, client=client))

    async def run() -> None:
        await asyncio.gather(*(registry.call("get_list", {"listId": "L"}) for registry in registries))

    asyncio.run(run())
    assert sorted(seen) == ["one.test Bearer a", "two.test Bearer b"]


def test_empty_token_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        Credentials.create("   ")
    with pytest.raises(ConfigurationError):
        Credentials.create(None, "https://api.test")


def test_search_thresholds_accept_fractions(make_registry) -> None:
    handler = RecordingHandler()
    registry = make_registry(handler)

    asyncio.run(registry.call("search_tweets", {"minLikes": 1.5, "count": 20}))

    assert handler.last.url.query == b"count=20&minLikes=1.5"
