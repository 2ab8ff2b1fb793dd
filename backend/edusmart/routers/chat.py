from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

from ..deps import document_response, get_generator, require_text, result_payload, wants_pdf
from ..generator import ResponseGenerator
from ..prompts import build_chat_prompt
from ..rate_limit import enforce_rate_limit
from ..tasks import TaskType

router = APIRouter(tags=["chat"], dependencies=[Depends(enforce_rate_limit)])


class ChatRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	message: Optional[str] = None
	# Earlier turns as sent by the widget; entries are passed through as-is
	history: List[Any] = Field(default_factory=list)
	student_level: str = Field(default="high-school", alias="studentLevel")


@router.post("/chat")
async def chat(
	req: ChatRequest,
	download: Optional[str] = Query(default=None),
	generator: ResponseGenerator = Depends(get_generator),
):
	message = require_text(req.message, "Message is required")
	context = build_chat_prompt(req.student_level, req.history)
	result = await generator.generate(message, context, TaskType.CHAT)
	if wants_pdf(download):
		return await document_response(result.text, "Tutor Response")
	return result_payload(
		result,
		type="tutor-response",
		studentLevel=req.student_level,
		conversationLength=len(req.history) + 1,
	)
