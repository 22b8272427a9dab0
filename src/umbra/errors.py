from __future__ import annotations

import logging
import traceback
from typing import Any, Literal

logger = logging.getLogger(__name__)

ErrorCode = Literal[
	"effect",
	"effect.teardown",
	"scheduler",
]


class UmbraError(RuntimeError):
	"""Base class for errors raised by umbra."""


class HookError(UmbraError):
	pass


class InvalidHookCallError(HookError):
	"""A hook was called while no component was rendering."""


class RenderPhaseUpdateError(HookError):
	"""A state setter was called while its own component was rendering."""


class InvalidSpecError(UmbraError, TypeError):
	"""A value could not be classified as a spec."""

	value: Any

	def __init__(self, value: Any, message: str | None = None) -> None:
		self.value = value
		super().__init__(
			message
			or f"Invalid spec of type {type(value).__name__}: {value!r}. "
			+ "Expected a component spec, host spec, text, sequence or None"
		)


class RenderLoopError(UmbraError):
	"""Effects kept scheduling work past the configured flush limit."""


def _format_stack(exc: BaseException) -> str:
	return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def report(
	exc: BaseException,
	*,
	code: ErrorCode,
	details: dict[str, Any] | None = None,
	message: str | None = None,
) -> None:
	"""Log an exception that umbra swallowed instead of propagating."""
	payload_message = message or str(exc)
	logger.error(
		"umbra error code=%s message=%s details=%s\n%s",
		code,
		payload_message,
		details or {},
		_format_stack(exc),
	)


__all__ = [
	"ErrorCode",
	"HookError",
	"InvalidHookCallError",
	"InvalidSpecError",
	"RenderLoopError",
	"RenderPhaseUpdateError",
	"UmbraError",
	"report",
]
