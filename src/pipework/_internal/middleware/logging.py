from __future__ import annotations

import logging
import time
from http import HTTPStatus
from typing import TYPE_CHECKING, final

from typing_extensions import override

from pipework._internal.middleware.base import BaseMiddleware

if TYPE_CHECKING:
    from pipework._internal.middleware.base import CallNext
    from pipework._internal.request import RequestLike, Response

default_logger = logging.getLogger("pipework.middleware")


@final
class LoggingMiddleware(BaseMiddleware):
    """Logs each request, and the response or failure it ended with."""

    __slots__: tuple[str, ...] = ("level", "logger")

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        level: int = logging.INFO,
    ) -> None:
        self.logger: logging.Logger = logger or default_logger
        self.level: int = level

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        method, path = request.method, request.path
        self.logger.log(self.level, "%s %s", method, path)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            self.logger.exception(
                "%s %s failed after %.2fms",
                method,
                path,
                elapsed,
            )
            raise
        elapsed = (time.perf_counter() - start) * 1000
        status = int(response.status)
        self.logger.log(
            self.level,
            "%s %s -> %d %s in %.2fms",
            method,
            path,
            status,
            _phrase(status),
            elapsed,
        )
        return response


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""
