"""Task types and the model/credential table they route to.

The table is built once at startup from :class:`Settings` and validated
eagerly: every task must end up with a credential, and override maps may only
name known tasks.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping

from .errors import ConfigurationError
from .settings import Settings


class TaskType(str, Enum):
	ASSIGNMENT = "assignment"
	LONG_ANSWER = "long-answer"
	SHORT_ANSWER = "short-answer"
	QUIZ = "quiz"
	GRAMMAR = "grammar"
	CHAT = "chat"
	GENERAL = "general"


@dataclass(frozen=True)
class TaskProfile:
	model: str
	api_key: str
	temperature: float
	max_tokens: int


TaskTable = Mapping[TaskType, TaskProfile]


_GEMINI_FLASH = "google/gemini-2.0-flash-exp:free"
_QWEN_CODER = "qwen/qwen3-coder:free"
_GLM_AIR = "z-ai/glm-4.5-air:free"

# (model, temperature, max_tokens); credentials are filled in from settings
DEFAULT_PROFILES: Dict[TaskType, tuple[str, float, int]] = {
	TaskType.ASSIGNMENT: (_GEMINI_FLASH, 0.7, 2048),
	TaskType.LONG_ANSWER: (_GEMINI_FLASH, 0.7, 4096),
	TaskType.SHORT_ANSWER: (_QWEN_CODER, 0.3, 256),
	TaskType.QUIZ: (_GLM_AIR, 0.5, 2048),
	TaskType.GRAMMAR: (_QWEN_CODER, 0.2, 2048),
	TaskType.CHAT: (_GLM_AIR, 0.7, 1024),
	TaskType.GENERAL: (_GEMINI_FLASH, 0.7, 2048),
}


def _parse_task_keys(raw: Mapping[str, str], setting_name: str) -> Dict[TaskType, str]:
	parsed: Dict[TaskType, str] = {}
	for key, value in raw.items():
		try:
			task = TaskType(key)
		except ValueError:
			valid = ", ".join(t.value for t in TaskType)
			raise ConfigurationError(f"{setting_name} names unknown task '{key}' (expected one of: {valid})")
		parsed[task] = value
	return parsed


def build_task_table(settings: Settings) -> Dict[TaskType, TaskProfile]:
	api_keys = _parse_task_keys(settings.openrouter_task_api_keys, "OPENROUTER_TASK_API_KEYS")
	models = _parse_task_keys(settings.openrouter_task_models, "OPENROUTER_TASK_MODELS")

	table: Dict[TaskType, TaskProfile] = {}
	missing: list[str] = []
	for task, (model, temperature, max_tokens) in DEFAULT_PROFILES.items():
		api_key = (api_keys.get(task) or settings.openrouter_api_key or "").strip()
		if not api_key:
			missing.append(task.value)
			continue
		table[task] = TaskProfile(
			model=models.get(task) or model,
			api_key=api_key,
			temperature=temperature,
			max_tokens=max_tokens,
		)
	if missing:
		raise ConfigurationError(
			"OPENROUTER_API_KEY is required (no credential configured for: " + ", ".join(missing) + ")"
		)
	return table
