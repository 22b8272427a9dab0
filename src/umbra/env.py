from __future__ import annotations

import logging
import os
from typing import Literal, cast

logger = logging.getLogger(__name__)

UmbraMode = Literal["dev", "prod"]

ENV_UMBRA_ENV = "UMBRA_ENV"
ENV_UMBRA_FLUSH_LIMIT = "UMBRA_FLUSH_LIMIT"

DEFAULT_FLUSH_LIMIT = 100


class Env:
	"""Typed access to umbra's environment variables.

	Values are read on every access so tests can patch ``os.environ``. An
	unrecognised ``UMBRA_ENV`` falls back to ``"prod"`` with a warning, logged
	once per value.
	"""

	_reported: set[str]

	def __init__(self) -> None:
		self._reported = set()

	@property
	def mode(self) -> UmbraMode:
		value = os.environ.get(ENV_UMBRA_ENV, "prod").strip().lower()
		if value not in ("dev", "prod"):
			if value not in self._reported:
				self._reported.add(value)
				logger.warning(
					"%s must be 'dev' or 'prod', got %r; using 'prod'",
					ENV_UMBRA_ENV,
					value,
				)
			return "prod"
		return cast(UmbraMode, value)

	@mode.setter
	def mode(self, value: UmbraMode) -> None:
		if value not in ("dev", "prod"):
			raise ValueError(f"{ENV_UMBRA_ENV} must be 'dev' or 'prod', got {value!r}")
		os.environ[ENV_UMBRA_ENV] = value

	@property
	def flush_limit(self) -> int:
		raw = os.environ.get(ENV_UMBRA_FLUSH_LIMIT)
		if raw is None or raw == "":
			return DEFAULT_FLUSH_LIMIT
		limit = int(raw)
		if limit < 1:
			raise ValueError(f"{ENV_UMBRA_FLUSH_LIMIT} must be positive, got {limit}")
		return limit


env = Env()


__all__ = [
	"DEFAULT_FLUSH_LIMIT",
	"ENV_UMBRA_ENV",
	"ENV_UMBRA_FLUSH_LIMIT",
	"Env",
	"UmbraMode",
	"env",
]
