from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from typing import Optional

from ..deps import document_response, get_generator, require_text, result_payload, wants_pdf
from ..generator import ResponseGenerator
from ..prompts import build_assignment_prompt
from ..rate_limit import enforce_rate_limit
from ..tasks import TaskType
from ..text_stats import word_count

router = APIRouter(tags=["assignment"], dependencies=[Depends(enforce_rate_limit)])


class AssignmentRequest(BaseModel):
	prompt: Optional[str] = None
	level: str = "high-school"
	subject: str = "General"


@router.post("/generate-assignment")
async def generate_assignment(
	req: AssignmentRequest,
	download: Optional[str] = Query(default=None),
	generator: ResponseGenerator = Depends(get_generator),
):
	topic = require_text(req.prompt, "Prompt is required", example={"prompt": "Photosynthesis in plants"})
	context = build_assignment_prompt(topic, req.level, req.subject)
	result = await generator.generate(topic, context, TaskType.ASSIGNMENT)
	if wants_pdf(download):
		return await document_response(result.text, f"Assignment - {topic}")
	return result_payload(
		result,
		type="assignment",
		subject=req.subject,
		level=req.level,
		wordCount=word_count(result.text),
	)
