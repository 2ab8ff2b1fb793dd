from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .errors import GatewayError, InvalidRequest
from .generator import ClientFactory, ResponseGenerator
from .logging_setup import setup_logging
from .openrouter_client import client_factory_from_settings
from .rate_limit import FixedWindowRateLimiter
from .routers import answers, assignment, chat, grammar, health, quiz
from .routers.health import AVAILABLE_ENDPOINTS
from .settings import Settings, settings as default_settings
from .tasks import build_task_table

log = logging.getLogger("edusmart.main")


def _timestamp() -> str:
	return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_app(
	settings: Optional[Settings] = None,
	client_factory: Optional[ClientFactory] = None,
) -> FastAPI:
	"""Build the gateway app; raises ConfigurationError when a task has no credential."""
	settings = settings or default_settings
	task_table = build_task_table(settings)

	app = FastAPI(title="EduSmart AI API", version=__version__)
	app.state.settings = settings
	app.state.generator = ResponseGenerator(task_table, client_factory or client_factory_from_settings(settings))
	app.state.rate_limiter = FixedWindowRateLimiter(
		settings.rate_limit_max_requests,
		settings.rate_limit_window_seconds,
	)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origins if settings.is_production else ["*"],
		allow_methods=["*"],
		allow_headers=["*"],
	)

	app.include_router(health.router)
	app.include_router(assignment.router)
	app.include_router(answers.router)
	app.include_router(quiz.router)
	app.include_router(grammar.router)
	app.include_router(chat.router)

	@app.exception_handler(GatewayError)
	async def gateway_error_handler(request: Request, exc: GatewayError):
		status = exc.status_code(settings.distinct_error_status)
		if isinstance(exc, InvalidRequest):
			log.info("Rejected %s: %s", request.url.path, exc.message)
		else:
			log.error(
				"%s on %s (task=%s, upstream_status=%s): %s",
				exc.kind, request.url.path, exc.task_type, exc.upstream_status, exc.message,
			)
		body = {"error": exc.message, "kind": exc.kind, "timestamp": _timestamp()}
		example = getattr(exc, "example", None)
		if example:
			body["example"] = example
		return JSONResponse(status_code=status, content=body)

	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		return JSONResponse(
			status_code=400,
			content={"error": "Invalid request body", "kind": InvalidRequest.kind, "details": jsonable_encoder(exc.errors())},
		)

	@app.exception_handler(StarletteHTTPException)
	async def http_error_handler(request: Request, exc: StarletteHTTPException):
		if exc.status_code in (404, 405):
			return JSONResponse(
				status_code=404,
				content={"error": "Endpoint not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
			)
		return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

	log.info(
		"EduSmart AI configured for %d task types (environment=%s, rate limit %d/%ds)",
		len(task_table), settings.environment, settings.rate_limit_max_requests, settings.rate_limit_window_seconds,
	)
	return app


def run() -> None:
	import uvicorn

	setup_logging(default_settings.log_level)
	app = create_app()
	log.info("EduSmart AI server starting on %s:%s", default_settings.host, default_settings.port)
	uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
	run()
