from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, final

from typing_extensions import override

from pipework._internal.configuration import RetryOptions
from pipework._internal.middleware.base import BaseMiddleware

if TYPE_CHECKING:
    from pipework._internal.middleware.base import CallNext
    from pipework._internal.request import RequestLike, Response

logger = logging.getLogger("pipework.middleware")


@final
class RetryMiddleware(BaseMiddleware):
    """Runs the rest of the pipeline again when it fails.

    Each new attempt sees the same request object, so anything later
    middleware changed on it (such as a path fork's rewrite) is undone
    before retrying.
    """

    __slots__: tuple[str, ...] = ("options",)

    def __init__(self, options: RetryOptions | None = None) -> None:
        self.options: RetryOptions = options or RetryOptions()

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        max_retries = self.options.max_retries
        path = request.path
        extensions = dict(request.extensions)
        failures = 0
        while True:
            try:
                return await call_next(request)
            except self.options.retry_on as exc:  # noqa: PERF203
                failures += 1
                if failures > max_retries:
                    msg = (
                        f"Request failed after exhausting all {max_retries}"
                        " retries. Propagating error."
                    )
                    logger.warning(msg)
                    raise

                seconds_wait = self.options.delay_for(failures)
                logger.warning(
                    "Attempt %s/%s failed. Retrying in %ss. Error: %s",
                    failures,
                    max_retries,
                    seconds_wait,
                    exc,
                )
                request.path = path
                request.extensions.clear()
                request.extensions.update(extensions)
                await asyncio.sleep(seconds_wait)
