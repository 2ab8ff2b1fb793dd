"""Response generation: task routing and normalization of completions."""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Protocol

from .errors import EmptyModelResponse, GatewayError, Timeout, UnknownTaskType
from .openrouter_client import Completion
from .tasks import TaskProfile, TaskTable, TaskType

log = logging.getLogger("edusmart.generator")


class CompletionClient(Protocol):
	async def complete(self, messages, *, model: str, temperature: float, max_tokens: int, task_type: Optional[str] = None) -> Completion: ...

	async def aclose(self) -> None: ...


ClientFactory = Callable[[str], CompletionClient]


def _utc_timestamp() -> str:
	return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class GenerationResult:
	text: str
	model_used: str
	tokens: Optional[int] = None
	timestamp: str = field(default_factory=_utc_timestamp)
	source: str = "openrouter"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"text": self.text,
			"source": self.source,
			"modelUsed": self.model_used,
			"tokens": self.tokens,
			"timestamp": self.timestamp,
		}


class ResponseGenerator:
	"""Routes a prompt to the model configured for its task type.

	``client_factory`` builds one upstream client per call from the task's
	credential; the client is closed once the call finishes.
	"""

	def __init__(self, task_table: TaskTable, client_factory: ClientFactory) -> None:
		self.task_table = task_table
		self.client_factory = client_factory

	def profile_for(self, task_type: TaskType | str) -> TaskProfile:
		try:
			return self.task_table[TaskType(task_type)]
		except (KeyError, ValueError):
			raise UnknownTaskType(f"Unknown task type '{getattr(task_type, 'value', task_type)}'")

	async def generate(
		self,
		prompt: str,
		system_context: str,
		task_type: TaskType | str,
		*,
		timeout: Optional[float] = None,
	) -> GenerationResult:
		profile = self.profile_for(task_type)
		task = TaskType(task_type).value
		messages = [
			{"role": "system", "content": system_context},
			{"role": "user", "content": prompt},
		]
		log.info("Using model %s for task %s", profile.model, task)

		client = self.client_factory(profile.api_key)
		try:
			call = client.complete(
				messages,
				model=profile.model,
				temperature=profile.temperature,
				max_tokens=profile.max_tokens,
				task_type=task,
			)
			if timeout:
				completion = await asyncio.wait_for(call, timeout=timeout)
			else:
				completion = await call
		except asyncio.TimeoutError:
			log.error("Task %s exceeded %ss waiting for model %s", task, timeout, profile.model)
			raise Timeout(task_type=task)
		except GatewayError as err:
			err.task_type = err.task_type or task
			raise
		finally:
			await client.aclose()

		if not completion.text or not completion.text.strip():
			raise EmptyModelResponse(task_type=task)
		return GenerationResult(text=completion.text, model_used=profile.model, tokens=completion.total_tokens)
