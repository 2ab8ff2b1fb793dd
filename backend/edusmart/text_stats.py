"""Rough text statistics derived by plain string splitting."""
from __future__ import annotations
import math

WORDS_PER_MINUTE = 200


def word_count(text: str) -> int:
	return len(text.split())


def reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> str:
	minutes = math.ceil(word_count(text) / words_per_minute)
	return f"{minutes} minutes"


def sentence_count(text: str) -> int:
	return sum(text.count(mark) for mark in (".", "!", "?"))
