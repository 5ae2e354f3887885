"""
Tests for the aiohttp-based adapter against a local aiohttp server
"""

import asyncio
import json

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as LocalServer

from typed_request import Method, NetworkError, TimeoutError, TypedRequest
from typed_request.http import AiohttpAdapter


async def echo(request):
    body = await request.read()
    return web.json_response(
        {
            "body": body.decode(),
            "content_type": request.headers.get("Content-Type"),
            "user_agent": request.headers.get("User-Agent"),
            "query": dict(request.query),
        },
        status=201,
        headers={"ETag": "v3"},
    )


async def serve(app):
    server = LocalServer(app)
    await server.start_server()
    return server


def test_post_sends_body_and_returns_response(listener):
    async def run():
        app = web.Application()
        app.router.add_post("/spots", echo)
        server = await serve(app)
        try:
            request = TypedRequest(Method.POST, str(server.make_url("/spots")), listener, entity={"a": 1})
            async with AiohttpAdapter(user_agent="typed-request-tests") as adapter:
                return await adapter.perform(request), request
        finally:
            await server.close()

    response, request = asyncio.run(run())

    assert response.status_code == 201
    assert response.header("etag") == "v3"
    assert request.parse_network_response(response).value is None
    echoed = json.loads(response.data)
    assert echoed["body"] == '{"a":1}'
    assert echoed["content_type"] == "application/json"
    assert echoed["user_agent"] == "typed-request-tests"


def test_get_sends_query_string(listener):
    app = web.Application()
    app.router.add_get("/spots", echo)

    async def run():
        server = await serve(app)
        try:
            request = TypedRequest(
                Method.GET, str(server.make_url("/spots")), listener, params={"city": "new york"}, response_type=dict
            )
            async with AiohttpAdapter() as adapter:
                response = await adapter.perform(request)
            return request.parse_network_response(response)
        finally:
            await server.close()

    outcome = asyncio.run(run())

    assert outcome.value["query"] == {"city": "new york"}
    assert outcome.value["content_type"] is None


def test_timeout_retries_then_raises_timeout_error(listener):
    hits = []

    async def slow(request):
        hits.append(1)
        await asyncio.sleep(0.5)
        return web.json_response({})

    app = web.Application()
    app.router.add_get("/slow", slow)

    async def run():
        server = await serve(app)
        try:
            request = TypedRequest(Method.GET, str(server.make_url("/slow")), listener, timeout_ms=50)
            async with AiohttpAdapter() as adapter:
                await adapter.perform(request)
        finally:
            await server.close()

    with pytest.raises(TimeoutError) as exc_info:
        asyncio.run(run())

    assert len(hits) == 2
    assert exc_info.value.status_code == 0


def test_connection_error_retries_then_raises_network_error(listener):
    async def run():
        server = await serve(web.Application())
        url = str(server.make_url("/gone"))
        await server.close()

        request = TypedRequest(Method.GET, url, listener)
        async with AiohttpAdapter() as adapter:
            await adapter.perform(request)

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(run())

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)


def test_perform_without_session_raises(listener):
    request = TypedRequest(Method.GET, "http://127.0.0.1:1/", listener)

    with pytest.raises(RuntimeError):
        asyncio.run(AiohttpAdapter().perform(request))


def test_owned_session_is_closed_external_session_is_not():
    async def run():
        async with AiohttpAdapter() as owned:
            pass

        external = aiohttp.ClientSession()
        async with AiohttpAdapter(session=external):
            pass
        still_open = not external.closed
        await external.close()
        return owned.session.closed, still_open

    owned_closed, external_open = asyncio.run(run())

    assert owned_closed is True
    assert external_open is True
