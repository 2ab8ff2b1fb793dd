from __future__ import annotations
import logging
import httpx
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import EmptyModelResponse, Timeout, UpstreamUnavailable, error_for_status
from .settings import Settings

log = logging.getLogger("edusmart.openrouter")

# OpenRouter error objects use HTTP-like codes inside a 200 body
_BODY_ERROR_STATUSES = {400, 401, 402, 403, 404, 408, 429, 500, 502, 503}


def _snippet(text: str, n: int = 300) -> str:
	return (text or "")[:n].replace("\n", "\\n")


@dataclass(frozen=True)
class Completion:
	text: str
	total_tokens: Optional[int] = None


class OpenRouterClient:
	"""Async chat-completions client for a single credential."""

	def __init__(
		self,
		api_key: str,
		*,
		base_url: str,
		referer: str,
		title: str,
		timeout: float = 60.0,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		if not api_key:
			raise ValueError("OpenRouter API key is not configured")
		self.url = f"{base_url.rstrip('/')}/chat/completions"
		self._headers = {
			"Authorization": f"Bearer {api_key}",
			"Content-Type": "application/json",
			"HTTP-Referer": referer,
			"X-Title": title,
		}
		self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

	async def complete(
		self,
		messages: List[Dict[str, str]],
		*,
		model: str,
		temperature: float,
		max_tokens: int,
		task_type: Optional[str] = None,
	) -> Completion:
		payload: Dict[str, Any] = {
			"model": model,
			"messages": messages,
			"temperature": temperature,
			"max_tokens": max_tokens,
		}
		try:
			r = await self._client.post(self.url, headers=self._headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			status = http_err.response.status_code
			log.error(
				"OpenRouter HTTP %s for task=%s model=%s: %s",
				status, task_type, model, _snippet(http_err.response.text),
			)
			raise error_for_status(status, model=model, task_type=task_type) from http_err
		except httpx.TimeoutException as timeout_err:
			log.error("OpenRouter timed out for task=%s model=%s: %s", task_type, model, timeout_err)
			raise Timeout(task_type=task_type) from timeout_err
		except httpx.RequestError as net_err:
			log.error("OpenRouter unreachable for task=%s model=%s: %s", task_type, model, net_err)
			raise UpstreamUnavailable(task_type=task_type) from net_err

		try:
			data = r.json()
		except ValueError as parse_err:
			log.error("Unexpected OpenRouter response for task=%s: %s", task_type, _snippet(r.text))
			raise UpstreamUnavailable(task_type=task_type) from parse_err

		if isinstance(data, dict) and data.get("error"):
			err = data["error"] if isinstance(data["error"], dict) else {}
			code = err.get("code")
			status = code if isinstance(code, int) and code in _BODY_ERROR_STATUSES else None
			log.error("OpenRouter error body for task=%s model=%s: %s", task_type, model, _snippet(str(data["error"])))
			raise error_for_status(status, model=model, task_type=task_type)

		try:
			content = data["choices"][0]["message"].get("content")
		except (KeyError, IndexError, TypeError, AttributeError):
			content = None
		if not isinstance(content, str) or not content.strip():
			log.warning("Empty completion for task=%s model=%s", task_type, model)
			raise EmptyModelResponse(task_type=task_type)

		usage = data.get("usage") or {}
		return Completion(
			text=content,
			total_tokens=usage.get("total_tokens"),
		)

	async def aclose(self) -> None:
		await self._client.aclose()


def client_factory_from_settings(settings: Settings, *, transport: Optional[httpx.AsyncBaseTransport] = None):
	def factory(api_key: str) -> OpenRouterClient:
		return OpenRouterClient(
			api_key,
			base_url=settings.openrouter_base_url,
			referer=settings.openrouter_referer,
			title=settings.openrouter_title,
			timeout=settings.openrouter_timeout_seconds,
			transport=transport,
		)
	return factory
