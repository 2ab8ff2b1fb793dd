from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from edusmart.errors import (
	EmptyModelResponse,
	ModelNotFound,
	RateLimited,
	Timeout,
	Unauthorized,
	UpstreamUnavailable,
)
from edusmart.openrouter_client import Completion, OpenRouterClient

MESSAGES = [{"role": "system", "content": "ctx"}, {"role": "user", "content": "hi"}]


def _complete(handler: Callable[[httpx.Request], httpx.Response]) -> Completion:
	client = OpenRouterClient(
		"sk-test",
		base_url="https://openrouter.test/api/v1/",
		referer="http://localhost:3000",
		title="EduSmart AI",
		transport=httpx.MockTransport(handler),
	)

	async def go() -> Completion:
		try:
			return await client.complete(MESSAGES, model="qwen/qwen3-coder:free", temperature=0.3, max_tokens=256, task_type="short-answer")
		finally:
			await client.aclose()

	return asyncio.run(go())


def _ok(content: Any, usage: dict[str, int] | None = None) -> dict[str, Any]:
	data: dict[str, Any] = {"choices": [{"message": {"role": "assistant", "content": content}, "index": 0}]}
	if usage is not None:
		data["usage"] = usage
	return data


def test_request_shape_and_success() -> None:
	seen: dict[str, Any] = {}

	def handler(request: httpx.Request) -> httpx.Response:
		seen["url"] = str(request.url)
		seen["headers"] = request.headers
		seen["body"] = json.loads(request.content)
		return httpx.Response(200, json=_ok("Plants make food.", {"total_tokens": 17}))

	completion = _complete(handler)

	assert completion == Completion(text="Plants make food.", total_tokens=17)
	assert seen["url"] == "https://openrouter.test/api/v1/chat/completions"
	assert seen["headers"]["authorization"] == "Bearer sk-test"
	assert seen["headers"]["x-title"] == "EduSmart AI"
	assert seen["headers"]["http-referer"] == "http://localhost:3000"
	assert seen["body"]["model"] == "qwen/qwen3-coder:free"
	assert seen["body"]["messages"] == MESSAGES
	assert seen["body"]["temperature"] == 0.3
	assert seen["body"]["max_tokens"] == 256


def test_missing_usage_leaves_tokens_unset() -> None:
	completion = _complete(lambda request: httpx.Response(200, json=_ok("ok")))
	assert completion.total_tokens is None


@pytest.mark.parametrize(
	"status, expected",
	[
		(401, Unauthorized),
		(403, Unauthorized),
		(429, RateLimited),
		(404, ModelNotFound),
		(500, UpstreamUnavailable),
		(503, UpstreamUnavailable),
	],
)
def test_status_codes_map_to_taxonomy(status: int, expected: type) -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		return httpx.Response(status, json={"error": {"message": "secret upstream detail", "code": status}})

	with pytest.raises(expected) as exc_info:
		_complete(handler)
	assert exc_info.value.upstream_status == status
	assert exc_info.value.task_type == "short-answer"
	assert "secret upstream detail" not in exc_info.value.message


def test_model_not_found_names_the_model() -> None:
	with pytest.raises(ModelNotFound, match="qwen/qwen3-coder:free"):
		_complete(lambda request: httpx.Response(404, text="no such model"))


def test_error_object_in_ok_body() -> None:
	body = {"error": {"message": "Rate limit exceeded: free-models-per-day", "code": 429}}
	with pytest.raises(RateLimited):
		_complete(lambda request: httpx.Response(200, json=body))


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_content(content: Any) -> None:
	with pytest.raises(EmptyModelResponse):
		_complete(lambda request: httpx.Response(200, json=_ok(content)))


def test_no_choices_is_empty() -> None:
	with pytest.raises(EmptyModelResponse):
		_complete(lambda request: httpx.Response(200, json={"choices": []}))


def test_non_json_body() -> None:
	with pytest.raises(UpstreamUnavailable):
		_complete(lambda request: httpx.Response(200, text="<html>gateway</html>"))


def test_transport_timeout() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		raise httpx.ReadTimeout("timed out", request=request)

	with pytest.raises(Timeout):
		_complete(handler)


def test_connection_failure() -> None:
	def handler(request: httpx.Request) -> httpx.Response:
		raise httpx.ConnectError("refused", request=request)

	with pytest.raises(UpstreamUnavailable):
		_complete(handler)


def test_requires_api_key() -> None:
	with pytest.raises(ValueError):
		OpenRouterClient("", base_url="https://openrouter.test/api/v1", referer="r", title="t")
