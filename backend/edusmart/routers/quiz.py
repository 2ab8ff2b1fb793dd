from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from ..deps import document_response, get_generator, require_text, result_payload, wants_pdf
from ..generator import ResponseGenerator
from ..prompts import build_quiz_prompt
from ..rate_limit import enforce_rate_limit
from ..tasks import TaskType

router = APIRouter(tags=["quiz"], dependencies=[Depends(enforce_rate_limit)])


class QuizRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	prompt: Optional[str] = None
	difficulty: str = "medium"
	question_count: int = Field(default=5, ge=1, le=50, alias="questionCount")
	quiz_type: str = Field(default="mixed", alias="quizType")


@router.post("/generate-quiz")
async def generate_quiz(
	req: QuizRequest,
	download: Optional[str] = Query(default=None),
	generator: ResponseGenerator = Depends(get_generator),
):
	topic = require_text(req.prompt, "Topic is required")
	context = build_quiz_prompt(topic, req.difficulty, req.question_count, req.quiz_type)
	result = await generator.generate(topic, context, TaskType.QUIZ)
	if wants_pdf(download):
		return await document_response(result.text, f"Quiz - {topic}")
	return result_payload(
		result,
		type="quiz",
		difficulty=req.difficulty,
		questionCount=req.question_count,
		quizType=req.quiz_type,
	)
