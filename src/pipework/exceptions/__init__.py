"""Exceptions raised by pipework.

Failures raised by middleware themselves are never wrapped: they reach
the caller of :meth:`Pipeline.dispatch` unchanged unless a middleware such
as :class:`~pipework.middleware.ExceptionMiddleware` handles them.
"""

from pipework._internal.exceptions import (
    BasePipeworkError,
    NoHandlerError,
    PathParseError,
    PipelineFrozenError,
    RequestTimeoutError,
)

__all__ = (
    "BasePipeworkError",
    "NoHandlerError",
    "PathParseError",
    "PipelineFrozenError",
    "RequestTimeoutError",
)
