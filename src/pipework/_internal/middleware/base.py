from __future__ import annotations

from abc import ABCMeta, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias, runtime_checkable

from pipework._internal.pipeline import Next
from pipework._internal.request import RequestLike, Response

CallNext: TypeAlias = Next
HandlerFunc: TypeAlias = Callable[
    [RequestLike], Awaitable[Response] | Response
]
MiddlewareFunc: TypeAlias = Callable[
    [RequestLike, CallNext], Awaitable[Response]
]


@runtime_checkable
class BaseMiddleware(Protocol, metaclass=ABCMeta):
    """A unit of a pipeline.

    ``process`` may answer the request itself, mutate it, delegate to the
    rest of the pipeline with ``await call_next(request)``, and inspect or
    replace whatever the delegate returned. A middleware should invoke
    ``call_next`` at most once per request unless it deliberately repeats
    the remainder of the pipeline (e.g. a retry).
    """

    @abstractmethod
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        pass


@runtime_checkable
class Handler(Protocol):
    """Anything that turns a request into a response without a "next"."""

    def handle(
        self,
        request: RequestLike,
    ) -> Awaitable[Response] | Response: ...
