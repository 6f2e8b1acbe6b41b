from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, final

from pipework._internal.exceptions import (
    NoHandlerError,
    raise_pipeline_frozen_error,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pipework._internal.middleware.base import BaseMiddleware
    from pipework._internal.request import RequestLike, Response

logger = logging.getLogger("pipework.pipeline")


@final
@dataclass(slots=True, frozen=True)
class Next:
    """Handle to the rest of a pipeline, starting at ``index``."""

    pipeline: Pipeline
    index: int

    async def invoke(self, request: RequestLike) -> Response:
        return await self.pipeline._dispatch_from(self.index, request)  # noqa: SLF001

    async def __call__(self, request: RequestLike) -> Response:
        return await self.invoke(request)


class Pipeline:
    """Ordered chain of middleware, executed in registration order.

    Every request starts at the first middleware. Each one may answer the
    request, mutate it, or hand it on to the next middleware through the
    ``call_next`` argument it receives. Running off the end of the chain
    raises :class:`NoHandlerError`.

    The middleware list is frozen by the first dispatch, so a pipeline can
    be shared by any number of concurrent requests.
    """

    __slots__: tuple[str, ...] = ("_frozen", "_middleware", "name")

    def __init__(
        self,
        middleware: Sequence[BaseMiddleware] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        self._middleware: list[BaseMiddleware] = []
        self._frozen: bool = False
        self.name: str = name or "pipeline"
        for m in middleware or ():
            self.add(m)

    def __repr__(self) -> str:
        return f"<Pipeline {self.name!r} middleware={len(self)}>"

    def __len__(self) -> int:
        return len(self._middleware)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add(self, middleware: BaseMiddleware) -> None:
        if self._frozen:
            raise_pipeline_frozen_error("add")
        logger.debug(
            "Adding %s to %s at position %d",
            type(middleware).__name__,
            self.name,
            len(self._middleware),
        )
        self._middleware.append(middleware)

    async def dispatch(self, request: RequestLike) -> Response:
        self._frozen = True
        return await self._dispatch_from(0, request)

    async def handle(self, request: RequestLike) -> Response:
        return await self.dispatch(request)

    async def __call__(self, request: RequestLike) -> Response:
        return await self.dispatch(request)

    async def _dispatch_from(
        self,
        index: int,
        request: RequestLike,
    ) -> Response:
        try:
            middleware = self._middleware[index]
        except IndexError:
            logger.debug(
                "No middleware left in %s at position %d for %s %s",
                self.name,
                index,
                request.method,
                request.path,
            )
            raise NoHandlerError from None
        return await middleware.process(request, Next(self, index + 1))
