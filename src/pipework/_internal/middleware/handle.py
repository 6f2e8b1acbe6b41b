from __future__ import annotations

import asyncio
import functools
import inspect
from typing import TYPE_CHECKING, final

from typing_extensions import override

from pipework._internal.common.constants import RunMode
from pipework._internal.middleware.base import BaseMiddleware, Handler

if TYPE_CHECKING:
    from concurrent.futures import Executor

    from pipework._internal.middleware.base import (
        CallNext,
        HandlerFunc,
        MiddlewareFunc,
    )
    from pipework._internal.request import RequestLike, Response


@final
class Handle(BaseMiddleware):
    """Adapt a terminal handler into middleware.

    The wrapped handler never sees ``call_next``, so it always ends the
    pipeline. It may be a plain function, a coroutine function, a
    :class:`Pipeline`, or any object with a ``handle(request)`` method.
    With ``RunMode.THREAD`` a synchronous handler runs in ``executor``
    (or the loop's default executor) instead of on the event loop.
    """

    __slots__: tuple[str, ...] = ("executor", "func", "run_mode")

    def __init__(
        self,
        func: HandlerFunc | Handler,
        *,
        run_mode: RunMode = RunMode.MAIN,
        executor: Executor | None = None,
    ) -> None:
        if not callable(func) and isinstance(func, Handler):
            func = func.handle
        self.func: HandlerFunc = func
        self.run_mode: RunMode = RunMode(run_mode)
        self.executor: Executor | None = executor

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"Handle({name})"

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        if self.run_mode is RunMode.THREAD and not _is_async(self.func):
            loop = asyncio.get_running_loop()
            call = functools.partial(self.func, request)
            return await loop.run_in_executor(self.executor, call)  # pyright: ignore[reportReturnType]

        result = self.func(request)
        if inspect.isawaitable(result):
            return await result
        return result


@final
class HandleNext(BaseMiddleware):
    """Adapt ``async def func(request, call_next)`` into middleware."""

    __slots__: tuple[str, ...] = ("func",)

    def __init__(self, func: MiddlewareFunc) -> None:
        self.func: MiddlewareFunc = func

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"HandleNext({name})"

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        return await self.func(request, call_next)


def _is_async(func: object) -> bool:
    while isinstance(func, functools.partial):
        func = func.func
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None),  # noqa: B004
    )
