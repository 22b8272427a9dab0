from __future__ import annotations

from typing import Generic, TypeVar, override

T = TypeVar("T")


class Ref(Generic[T]):
	"""Mutable cell whose identity stays stable across renders.

	Passed as the ``ref`` prop of a host spec, it receives the output node once
	mounted and is reset to ``None`` when that node is removed.
	"""

	__slots__: tuple[str, ...] = ("current",)
	current: T

	def __init__(self, current: T = None) -> None:  # pyright: ignore[reportArgumentType]
		self.current = current

	@override
	def __repr__(self) -> str:
		return f"Ref(current={self.current!r})"


__all__ = ["Ref"]
