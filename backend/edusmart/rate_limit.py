from __future__ import annotations
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from fastapi import HTTPException, Request

log = logging.getLogger("edusmart.rate_limit")

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class _Window:
	started_at: float
	count: int = 0


@dataclass(frozen=True)
class RateDecision:
	allowed: bool
	remaining: int
	retry_after: int


class FixedWindowRateLimiter:
	"""Counts requests per client within fixed windows of ``window_seconds``."""

	def __init__(self, max_requests: int, window_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
		if max_requests < 1 or window_seconds <= 0:
			raise ValueError("rate limit needs max_requests >= 1 and a positive window")
		self.max_requests = max_requests
		self.window_seconds = window_seconds
		self._clock = clock
		self._windows: Dict[str, _Window] = {}
		self._lock = threading.Lock()

	def hit(self, client_id: str) -> RateDecision:
		now = self._clock()
		with self._lock:
			window = self._windows.get(client_id)
			if window is None or now - window.started_at >= self.window_seconds:
				self._prune(now)
				window = _Window(started_at=now)
				self._windows[client_id] = window
			window.count += 1
			count = window.count
			reset_in = window.started_at + self.window_seconds - now
		return RateDecision(
			allowed=count <= self.max_requests,
			remaining=max(0, self.max_requests - count),
			retry_after=max(1, math.ceil(reset_in)),
		)

	def _prune(self, now: float) -> None:
		expired = [k for k, w in self._windows.items() if now - w.started_at >= self.window_seconds]
		for k in expired:
			del self._windows[k]


def client_address(request: Request) -> str:
	return request.client.host if request.client else "unknown"


async def enforce_rate_limit(request: Request) -> None:
	limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
	client_id = client_address(request)
	decision = limiter.hit(client_id)
	if not decision.allowed:
		log.warning("Rate limit hit for %s on %s", client_id, request.url.path)
		raise HTTPException(
			status_code=429,
			detail=RATE_LIMIT_MESSAGE,
			headers={"Retry-After": str(decision.retry_after)},
		)
