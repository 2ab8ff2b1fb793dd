from __future__ import annotations
from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union

from ..deps import document_response, get_generator, require_text, result_payload, wants_pdf
from ..generator import ResponseGenerator
from ..prompts import build_long_answer_prompt, build_short_answer_prompt
from ..rate_limit import enforce_rate_limit
from ..tasks import TaskType
from ..text_stats import reading_time, sentence_count

router = APIRouter(tags=["answers"], dependencies=[Depends(enforce_rate_limit)])


class LongAnswerRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	prompt: Optional[str] = None
	# Requested length, echoed back as given (e.g. "300-500")
	word_count: Union[str, int] = Field(default="300-500", alias="wordCount")
	subtopics: List[str] = Field(default_factory=list)


class ShortAnswerRequest(BaseModel):
	prompt: Optional[str] = None
	# Seconds before the fast path gives up; 0 waits for the model
	timeout: Optional[float] = Field(default=None, ge=0, le=120)


@router.post("/generate-long-answer")
async def generate_long_answer(
	req: LongAnswerRequest,
	download: Optional[str] = Query(default=None),
	generator: ResponseGenerator = Depends(get_generator),
):
	topic = require_text(req.prompt, "Prompt is required")
	subtopics = [s.strip() for s in req.subtopics if s and s.strip()]
	context = build_long_answer_prompt(topic, str(req.word_count), subtopics)
	result = await generator.generate(topic, context, TaskType.LONG_ANSWER)
	if wants_pdf(download):
		return await document_response(result.text, f"Long Answer - {topic}")
	return result_payload(
		result,
		type="long-answer",
		wordCount=req.word_count,
		subtopics=subtopics,
		readingTime=reading_time(result.text),
	)


@router.post("/generate-short-answer")
async def generate_short_answer(
	req: ShortAnswerRequest,
	request: Request,
	download: Optional[str] = Query(default=None),
	generator: ResponseGenerator = Depends(get_generator),
):
	question = require_text(req.prompt, "Prompt is required")
	timeout = req.timeout if req.timeout is not None else request.app.state.settings.short_answer_timeout_seconds
	context = build_short_answer_prompt(question)
	result = await generator.generate(question, context, TaskType.SHORT_ANSWER, timeout=timeout or None)
	if wants_pdf(download):
		return await document_response(result.text, f"Short Answer - {question}")
	return result_payload(
		result,
		type="short-answer",
		sentenceCount=sentence_count(result.text),
	)
