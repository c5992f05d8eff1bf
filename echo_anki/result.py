from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Result:
    """Outcome of a call to an external service.

    ``value`` holds the payload (generated text, audio path, note id) and
    ``error`` the reason when the call failed.
    """

    value: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: str) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "Result":
        return cls(error=error)
