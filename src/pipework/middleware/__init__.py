"""Middleware for use in a pipeline.

Terminal handlers, which know nothing about "next", can be added with
:class:`Handle`; such handlers are generally only useful at the end of a
pipeline.
"""

from pipework._internal.configuration import RetryOptions
from pipework._internal.middleware.base import (
    BaseMiddleware,
    CallNext,
    Handler,
)
from pipework._internal.middleware.exceptions import (
    ExceptionHandler,
    ExceptionMiddleware,
)
from pipework._internal.middleware.fork import (
    FnPredicate,
    Fork,
    ForkPredicate,
    PathFork,
    PathPredicate,
)
from pipework._internal.middleware.handle import Handle, HandleNext
from pipework._internal.middleware.logging import LoggingMiddleware
from pipework._internal.middleware.retry import RetryMiddleware
from pipework._internal.middleware.timeout import TimeoutMiddleware

__all__ = (
    "BaseMiddleware",
    "CallNext",
    "ExceptionHandler",
    "ExceptionMiddleware",
    "FnPredicate",
    "Fork",
    "ForkPredicate",
    "Handle",
    "HandleNext",
    "Handler",
    "LoggingMiddleware",
    "PathFork",
    "PathPredicate",
    "RetryMiddleware",
    "RetryOptions",
    "TimeoutMiddleware",
)
