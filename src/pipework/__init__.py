"""Ordered request pipelines built from composable middleware.

Every request travels through the middleware of a :class:`Pipeline` in
the order they were added. Each middleware may answer the request, change
it, pass it on to the rest of the pipeline, and change the response that
comes back. :class:`Fork` branches into a separate sub-pipeline by
predicate or by path prefix.
"""

from importlib.metadata import version as get_version

from pipework._internal.common.constants import ORIGINAL_PATH, RunMode
from pipework._internal.common.datastructures import Extensions, Headers
from pipework._internal.middleware.base import (
    BaseMiddleware,
    CallNext,
    Handler,
)
from pipework._internal.middleware.fork import Fork, PathFork, original_path
from pipework._internal.middleware.handle import Handle, HandleNext
from pipework._internal.pipeline import Next, Pipeline
from pipework._internal.request import Request, RequestLike, Response

__version__ = get_version("pipework")
__all__ = (
    "ORIGINAL_PATH",
    "BaseMiddleware",
    "CallNext",
    "Extensions",
    "Fork",
    "Handle",
    "HandleNext",
    "Handler",
    "Headers",
    "Next",
    "PathFork",
    "Pipeline",
    "Request",
    "RequestLike",
    "Response",
    "RunMode",
    "original_path",
)
