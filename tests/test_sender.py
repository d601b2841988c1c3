"""Tests for skylark.server.sender response emission rules."""

from typing import Any

import pytest

from skylark.http.response import Response
from skylark.server.sender import send_response


async def _emit(response: Response) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 304])
    async def test_no_body_statuses(self, status: int) -> None:
        messages = await _emit(Response("unexpected-body", status=status))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_body_and_headers(self) -> None:
        response = Response("ok").header("X-Thing", "yes")
        messages = await _emit(response)

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert headers[b"x-thing"] == b"yes"
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    @pytest.mark.asyncio
    async def test_custom_content_type_sent_once(self) -> None:
        response = Response("{}").header("Content-Type", "application/json")
        messages = await _emit(response)

        content_types = [v for k, v in messages[0]["headers"] if k == b"content-type"]
        assert content_types == [b"application/json"]
