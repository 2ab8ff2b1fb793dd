from __future__ import annotations
import json
from typing import Any, List, Optional


def build_assignment_prompt(topic: str, level: str, subject: str) -> str:
	return (
		"You are an expert educator creating assignments.\n"
		f"Create a comprehensive assignment for {level} level {subject} students on \"{topic}\".\n"
		"Include: Learning objectives, Instructions, Tasks/Questions, Evaluation criteria, "
		"and Submission guidelines. Use clear, academic language."
	)


def build_long_answer_prompt(topic: str, word_count: str, subtopics: Optional[List[str]] = None) -> str:
	prompt = (
		f"Provide a detailed {word_count} word comprehensive explanation on \"{topic}\".\n"
		"Structure with: Introduction, Main Body (with subheadings), Examples, and Conclusion.\n"
		"Use academic language and ensure factual accuracy."
	)
	if subtopics:
		prompt += "\nCover these subtopics in the main body: " + "; ".join(subtopics) + "."
	return prompt


def build_short_answer_prompt(question: str) -> str:
	return (
		f"Provide a concise, accurate 2-3 sentence answer to \"{question}\".\n"
		"Be direct, factual, and focus on the essential information only."
	)


def build_quiz_prompt(topic: str, difficulty: str, question_count: int, quiz_type: str) -> str:
	return (
		f"Generate a {question_count}-question {quiz_type} quiz on \"{topic}\" at {difficulty} difficulty.\n"
		"Include: Multiple choice (MCQ), True/False, and Short answer questions.\n"
		"Format each question clearly with answers at the end.\n"
		"Add a brief explanation for each answer."
	)


def build_grammar_prompt(style: str) -> str:
	return (
		"You are an expert editor. Improve the grammar, punctuation, clarity, "
		f"and {style} style of the following text while preserving the original meaning.\n"
		"Return only the corrected version with improvements."
	)


def build_chat_prompt(student_level: str, history: List[Any]) -> str:
	# Only the last three turns are carried into the context
	recent = json.dumps(history[-3:], ensure_ascii=False)
	return (
		f"You are an AI tutor for {student_level} students.\n"
		"Be helpful, patient, and educational. Explain concepts clearly with relatable examples.\n"
		"Keep responses engaging and appropriate for learners.\n"
		f"Current conversation history: {recent}"
	)
