from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from .errors import InvalidRequest
from .generator import GenerationResult, ResponseGenerator
from .pdf_export import pdf_filename, render_pdf


def get_generator(request: Request) -> ResponseGenerator:
	return request.app.state.generator


def require_text(value: Optional[str], message: str, example: Optional[Dict[str, Any]] = None) -> str:
	text = (value or "").strip()
	if not text:
		raise InvalidRequest(message, example=example)
	return text


def wants_pdf(download: Optional[str]) -> bool:
	return (download or "").strip().lower() == "pdf"


async def document_response(text: str, title: str) -> Response:
	# Render before building the response so a failure is still a clean JSON error
	content = await run_in_threadpool(render_pdf, text, title)
	return Response(
		content=content,
		media_type="application/pdf",
		headers={"Content-Disposition": f'attachment; filename="{pdf_filename(title)}"'},
	)


def result_payload(result: GenerationResult, **fields: Any) -> Dict[str, Any]:
	return {**result.to_dict(), **fields}
