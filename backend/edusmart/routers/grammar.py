from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from typing import Optional

from ..deps import document_response, get_generator, require_text, result_payload, wants_pdf
from ..generator import ResponseGenerator
from ..prompts import build_grammar_prompt
from ..rate_limit import enforce_rate_limit
from ..tasks import TaskType

router = APIRouter(tags=["grammar"], dependencies=[Depends(enforce_rate_limit)])


class GrammarRequest(BaseModel):
	text: Optional[str] = None
	style: str = "academic"


@router.post("/fix-grammar")
async def fix_grammar(
	req: GrammarRequest,
	download: Optional[str] = Query(default=None),
	generator: ResponseGenerator = Depends(get_generator),
):
	text = require_text(req.text, "Text is required")
	result = await generator.generate(text, build_grammar_prompt(req.style), TaskType.GRAMMAR)
	if wants_pdf(download):
		return await document_response(result.text, "Grammar Correction")
	return result_payload(
		result,
		type="grammar-correction",
		originalLength=len(text),
		correctedLength=len(result.text),
		style=req.style,
	)
