from __future__ import annotations

import pytest

from edusmart.errors import ConfigurationError
from edusmart.tasks import DEFAULT_PROFILES, TaskType, build_task_table

from conftest import make_settings


def test_every_task_gets_a_profile_from_the_shared_key() -> None:
	table = build_task_table(make_settings())
	assert set(table) == set(TaskType)
	assert all(p.api_key == "test-key" for p in table.values())
	assert table[TaskType.SHORT_ANSWER].model == "qwen/qwen3-coder:free"
	assert table[TaskType.SHORT_ANSWER].temperature == 0.3
	assert table[TaskType.LONG_ANSWER].max_tokens > table[TaskType.SHORT_ANSWER].max_tokens


def test_missing_credential_refuses_to_start() -> None:
	with pytest.raises(ConfigurationError, match="OPENROUTER_API_KEY"):
		build_task_table(make_settings(openrouter_api_key=None))


def test_per_task_keys_cover_only_some_tasks() -> None:
	with pytest.raises(ConfigurationError) as exc_info:
		build_task_table(make_settings(openrouter_api_key="", openrouter_task_api_keys={"quiz": "quiz-key"}))
	assert "assignment" in str(exc_info.value)
	assert "quiz," not in str(exc_info.value)


def test_per_task_overrides_win_over_defaults() -> None:
	table = build_task_table(
		make_settings(
			openrouter_task_api_keys={"quiz": "quiz-key"},
			openrouter_task_models={"chat": "openai/gpt-4o-mini"},
		)
	)
	assert table[TaskType.QUIZ].api_key == "quiz-key"
	assert table[TaskType.ASSIGNMENT].api_key == "test-key"
	assert table[TaskType.CHAT].model == "openai/gpt-4o-mini"
	assert table[TaskType.QUIZ].model == DEFAULT_PROFILES[TaskType.QUIZ][0]


def test_override_for_unknown_task_is_rejected() -> None:
	with pytest.raises(ConfigurationError, match="essay"):
		build_task_table(make_settings(openrouter_task_models={"essay": "some/model"}))


def test_selection_is_deterministic() -> None:
	first = build_task_table(make_settings())
	second = build_task_table(make_settings())
	assert first == second
