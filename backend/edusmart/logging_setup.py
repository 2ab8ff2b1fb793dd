"""Central logging setup for the gateway."""
from __future__ import annotations
import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
	"""
	Configure the root logger once with a timestamped stdout handler.

	Args:
		level: Logging level name or number.
	"""
	if isinstance(level, str):
		level = logging.getLevelName(level.upper())
		if not isinstance(level, int):
			level = logging.INFO
	handler = logging.StreamHandler(sys.stdout)
	handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
	root = logging.getLogger()
	root.handlers.clear()
	root.addHandler(handler)
	root.setLevel(level)
	logging.getLogger("httpx").setLevel(logging.WARNING)
