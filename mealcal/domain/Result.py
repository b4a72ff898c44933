"""Outcome of a repository write: success flag, optional value and the error that was swallowed."""
from typing import Any, Optional


class Result:
    def __init__(self, ok: bool, value: Any = None, error: Optional[Exception] = None):
        self.ok = ok
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Result":
        return cls(False, error=error)

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        return "Result(ok)" if self.ok else f"Result(error={self.error!r})"

    __repr__ = __str__
