"""
Result type for upstream calls

Upstream helpers return a Result instead of raising so failures can be
passed through the fetcher and the cache untouched. Only the HTTP layer
unwraps them.
"""

from dataclasses import dataclass
from typing import Any, Optional

from errors import LabelApiError


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: Optional[LabelApiError] = None

    @classmethod
    def success(cls, value=None) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: LabelApiError) -> 'Result':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self):
        """Return the value, or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.value
