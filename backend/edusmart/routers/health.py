from datetime import datetime, timezone

from fastapi import APIRouter, Request

from .. import __version__

router = APIRouter(tags=["health"])

AVAILABLE_ENDPOINTS = [
	"POST /generate-assignment",
	"POST /generate-long-answer",
	"POST /generate-short-answer",
	"POST /generate-quiz",
	"POST /fix-grammar",
	"POST /chat",
	"GET /health",
]


@router.get("/health")
def health(request: Request):
	state = request.app.state
	return {
		"status": "operational",
		"timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
		"version": __version__,
		"features": {
			"assignmentGenerator": True,
			"longAnswer": True,
			"shortAnswer": True,
			"quizGenerator": True,
			"grammarFixer": True,
			"aiTutorChat": True,
			"pdfExport": True,
		},
		"models": {
			task.value: {"model": profile.model, "configured": bool(profile.api_key)}
			for task, profile in state.generator.task_table.items()
		},
		"environment": state.settings.environment,
	}


@router.get("/")
def index():
	return {
		"message": "Welcome to EduSmart AI API",
		"endpoints": AVAILABLE_ENDPOINTS,
		"status": "active",
	}
