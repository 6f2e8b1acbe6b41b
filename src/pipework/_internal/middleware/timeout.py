from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, final

from typing_extensions import override

from pipework._internal.exceptions import RequestTimeoutError
from pipework._internal.middleware.base import BaseMiddleware

if TYPE_CHECKING:
    from pipework._internal.middleware.base import CallNext
    from pipework._internal.request import RequestLike, Response


@final
class TimeoutMiddleware(BaseMiddleware):
    __slots__: tuple[str, ...] = ("timeout",)

    def __init__(self, timeout: float) -> None:
        if timeout <= 0:
            msg = "timeout must be > 0."
            raise ValueError(msg)
        self.timeout: float = timeout

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), self.timeout)
        except asyncio.TimeoutError as exc:
            raise RequestTimeoutError(timeout=self.timeout) from exc
