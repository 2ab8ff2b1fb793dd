from __future__ import annotations
from typing import Optional


class GatewayError(Exception):
	"""Base failure carrying a client-safe message and a stable ``kind``."""

	kind = "InternalError"
	message = "AI service is currently unavailable. Please try again later."
	# Status used when distinct error statuses are enabled
	distinct_status = 500

	def __init__(
		self,
		message: Optional[str] = None,
		*,
		task_type: Optional[str] = None,
		upstream_status: Optional[int] = None,
	) -> None:
		self.message = message or self.message
		self.task_type = task_type
		self.upstream_status = upstream_status
		super().__init__(self.message)

	def status_code(self, distinct: bool = False) -> int:
		return self.distinct_status if distinct else 500


class ConfigurationError(Exception):
	pass


class InvalidRequest(GatewayError):
	kind = "InvalidRequest"
	message = "Invalid request"
	distinct_status = 400

	def __init__(self, message: Optional[str] = None, *, example: Optional[dict] = None, **kwargs) -> None:
		super().__init__(message, **kwargs)
		self.example = example

	def status_code(self, distinct: bool = False) -> int:
		return 400


class UnknownTaskType(GatewayError):
	kind = "UnknownTaskType"
	message = "Unknown task type"


class EmptyModelResponse(GatewayError):
	kind = "EmptyModelResponse"
	message = "Empty response from AI model"


class UpstreamUnavailable(GatewayError):
	kind = "UpstreamUnavailable"
	distinct_status = 502


class Unauthorized(GatewayError):
	kind = "Unauthorized"
	message = "Authentication failed. Please check your API key configuration."
	distinct_status = 502


class RateLimited(GatewayError):
	kind = "RateLimited"
	message = "Rate limit exceeded. Please try again later."
	distinct_status = 429


class ModelNotFound(GatewayError):
	kind = "ModelNotFound"
	message = "Model not found. Please check model name or contact support."
	distinct_status = 502


class Timeout(GatewayError):
	kind = "Timeout"
	message = "The AI model took too long to respond. Please try again."
	distinct_status = 504


class DocumentExportFailed(GatewayError):
	kind = "DocumentExportFailed"
	message = "Failed to generate PDF document"


def error_for_status(status: Optional[int], *, model: str, task_type: Optional[str] = None) -> GatewayError:
	"""Translate an upstream HTTP status into the gateway taxonomy."""
	if status in (401, 403):
		return Unauthorized(task_type=task_type, upstream_status=status)
	if status == 429:
		return RateLimited(task_type=task_type, upstream_status=status)
	if status == 404:
		return ModelNotFound(
			f"Model '{model}' not found. Please check model name or contact support.",
			task_type=task_type,
			upstream_status=status,
		)
	return UpstreamUnavailable(task_type=task_type, upstream_status=status)
