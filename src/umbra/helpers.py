from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def same_value(left: Any, right: Any) -> bool:
	"""Identity first, then equality. Comparisons that raise count as different."""
	if left is right:
		return True
	try:
		return bool(left == right)
	except Exception:
		return False


def values_equal(left: Any, right: Any) -> bool:
	"""Structural equality used by `memo` components."""
	return same_value(left, right)


def deps_changed(
	previous: Sequence[Any] | None, current: Sequence[Any] | None
) -> bool:
	if previous is None or current is None:
		return True
	if len(previous) != len(current):
		return True
	return any(not same_value(a, b) for a, b in zip(previous, current, strict=True))


__all__ = ["deps_changed", "same_value", "values_equal"]
