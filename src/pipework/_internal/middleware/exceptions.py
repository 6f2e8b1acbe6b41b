from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, TypeAlias, final

from typing_extensions import override

from pipework._internal.exceptions import raise_pipeline_frozen_error
from pipework._internal.middleware.base import BaseMiddleware
from pipework._internal.request import RequestLike, Response

if TYPE_CHECKING:
    from pipework._internal.middleware.base import CallNext


ExceptionHandler: TypeAlias = Callable[
    [Exception, RequestLike], Awaitable[Response] | Response
]
ExceptionHandlers: TypeAlias = dict[type[Exception], ExceptionHandler]
MappingExceptionHandlers: TypeAlias = Mapping[
    type[Exception], ExceptionHandler
]


@final
class ExceptionMiddleware(BaseMiddleware):
    """Turns failures from the rest of the pipeline into responses.

    Handlers are looked up along the exception's MRO, so a handler for a
    base class also covers its subclasses. Unhandled failures propagate.
    """

    __slots__: tuple[str, ...] = ("_in_use", "exc_handlers")

    def __init__(
        self,
        exc_handlers: MappingExceptionHandlers | None = None,
    ) -> None:
        self.exc_handlers: ExceptionHandlers = dict(exc_handlers or {})
        self._in_use: bool = False

    def add_exception_handler(
        self,
        cls_exc: type[Exception],
        handler: ExceptionHandler,
    ) -> None:
        if self._in_use:
            raise_pipeline_frozen_error("add_exception_handler")
        self.exc_handlers[cls_exc] = handler

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        self._in_use = True
        try:
            return await call_next(request)
        except Exception as exc:
            handler = self._lookup_exc_handler(exc)
            if handler is None:
                raise
            response = handler(exc, request)
            if inspect.isawaitable(response):
                response = await response
            return response

    def _lookup_exc_handler(self, exc: Exception) -> ExceptionHandler | None:
        for cls_exc in type(exc).__mro__:
            if handler := self.exc_handlers.get(cls_exc):
                return handler
        return None
