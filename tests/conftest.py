from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from edusmart.main import create_app
from edusmart.openrouter_client import Completion
from edusmart.settings import Settings


class FakeCompletionClient:
	def __init__(self, api_key: str, upstream: "FakeUpstream") -> None:
		self.api_key = api_key
		self.upstream = upstream

	async def complete(self, messages, *, model: str, temperature: float, max_tokens: int, task_type: str | None = None) -> Completion:
		self.upstream.calls.append(
			{
				"api_key": self.api_key,
				"messages": messages,
				"model": model,
				"temperature": temperature,
				"max_tokens": max_tokens,
				"task_type": task_type,
			}
		)
		if self.upstream.delay:
			await asyncio.sleep(self.upstream.delay)
		if self.upstream.error is not None:
			raise self.upstream.error
		return Completion(text=self.upstream.text, total_tokens=self.upstream.tokens)

	async def aclose(self) -> None:
		self.upstream.closed += 1


class FakeUpstream:
	def __init__(self) -> None:
		self.text = "Photosynthesis turns light into chemical energy. It happens in chloroplasts."
		self.tokens: int | None = 42
		self.delay = 0.0
		self.error: Exception | None = None
		self.calls: list[dict[str, Any]] = []
		self.closed = 0

	def factory(self, api_key: str) -> FakeCompletionClient:
		return FakeCompletionClient(api_key, self)


def make_settings(**overrides: Any) -> Settings:
	values: dict[str, Any] = {
		"openrouter_api_key": "test-key",
		"openrouter_task_api_keys": {},
		"openrouter_task_models": {},
		"environment": "development",
	}
	values.update(overrides)
	return Settings(_env_file=None, **values)


@pytest.fixture
def upstream() -> FakeUpstream:
	return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
	return make_settings()


@pytest.fixture
def client(settings: Settings, upstream: FakeUpstream) -> TestClient:
	return TestClient(create_app(settings, upstream.factory))
