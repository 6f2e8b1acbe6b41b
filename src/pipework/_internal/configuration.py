from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, kw_only=True, frozen=True)
class RetryOptions:
    max_retries: int = field(default=3, kw_only=False)
    base_delay: float = 1.0
    max_delay: float = 60.0
    retry_on: tuple[type[Exception], ...] = (Exception,)

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            msg = "max_retries must be >= 0. Use 0 to disable retries."
            raise ValueError(msg)
        if self.base_delay < 0 or self.max_delay <= 0:
            msg = "base_delay must be >= 0 and max_delay must be > 0."
            raise ValueError(msg)

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * 2 ** (attempt - 1), self.max_delay)
