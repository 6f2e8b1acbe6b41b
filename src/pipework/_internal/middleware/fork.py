from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeAlias, final, runtime_checkable

from typing_extensions import override

from pipework._internal.common.constants import ORIGINAL_PATH, PATH_SEPARATOR
from pipework._internal.middleware.base import BaseMiddleware
from pipework._internal.path import parse_path, split_path, starts_with
from pipework._internal.pipeline import Pipeline
from pipework._internal.request import RequestLike

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pipework._internal.middleware.base import CallNext
    from pipework._internal.request import Response

logger = logging.getLogger("pipework.fork")

PipelineBuilder: TypeAlias = Callable[[Pipeline], object]
PredicateFunc: TypeAlias = Callable[[RequestLike], bool]


@runtime_checkable
class ForkPredicate(Protocol):
    """Decides whether a request branches into a fork's sub-pipeline."""

    def matches(self, request: RequestLike) -> bool: ...


@final
class FnPredicate(ForkPredicate):
    """Branch when ``func(request)`` is true."""

    __slots__: tuple[str, ...] = ("func",)

    def __init__(self, func: PredicateFunc) -> None:
        self.func: PredicateFunc = func

    @override
    def matches(self, request: RequestLike) -> bool:
        return bool(self.func(request))


@final
class PathPredicate(ForkPredicate):
    """Branch when the request path starts with the given segments."""

    __slots__: tuple[str, ...] = ("segments",)

    def __init__(self, segments: Sequence[str]) -> None:
        self.segments: tuple[str, ...] = tuple(segments)

    @override
    def matches(self, request: RequestLike) -> bool:
        return starts_with(split_path(request.path), self.segments)


class Fork(BaseMiddleware):
    """Middleware that hands a request to a sub-pipeline.

    When the predicate matches, the sub-pipeline answers the request and
    the rest of the outer pipeline never runs. Otherwise the request goes
    on to the next middleware unchanged.

    Build one with :meth:`when` or :meth:`when_path`::

        pipeline.add(Fork.when(lambda req: req.method == "POST", build_posts))
        pipeline.add(Fork.when_path("/api/v2", build_v2))
    """

    __slots__: tuple[str, ...] = ("predicate", "sub_pipeline")

    def __init__(
        self,
        sub_pipeline: Pipeline,
        predicate: ForkPredicate,
    ) -> None:
        sub_pipeline.freeze()
        self.sub_pipeline: Pipeline = sub_pipeline
        self.predicate: ForkPredicate = predicate

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.sub_pipeline!r}>"

    @classmethod
    def when(
        cls,
        predicate: PredicateFunc | ForkPredicate,
        builder: PipelineBuilder,
    ) -> Fork:
        """Fork on an arbitrary predicate.

        ``builder`` receives a fresh pipeline, runs once, right away, and
        the pipeline it populated is closed for further additions.
        """
        if not isinstance(predicate, ForkPredicate):
            predicate = FnPredicate(predicate)
        return Fork(_build(builder, "fork"), predicate)

    @classmethod
    def when_path(cls, path: str, builder: PipelineBuilder) -> PathFork:
        """Fork on a path prefix such as ``/api/v2``.

        Raises :class:`PathParseError` if ``path`` does not start with
        ``/`` or has no segments.
        """
        segments = parse_path(path)
        sub_pipeline = _build(builder, f"fork:{PATH_SEPARATOR.join(segments)}")
        return PathFork(sub_pipeline, PathPredicate(segments))

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        if self.predicate.matches(request):
            logger.debug(
                "%s %s matched %r",
                request.method,
                request.path,
                self,
            )
            self.on_match(request)
            return await self.sub_pipeline.dispatch(request)
        logger.debug(
            "%s %s did not match %r",
            request.method,
            request.path,
            self,
        )
        return await call_next(request)

    def on_match(self, request: RequestLike) -> None:
        """Prepare a matched request before the sub-pipeline sees it."""


@final
class PathFork(Fork):
    """Fork on a path prefix, stripping the prefix from the request path.

    The path the request arrived with is kept in
    ``request.extensions[ORIGINAL_PATH]``. The outermost path fork writes
    it; nested ones leave it alone, so :func:`original_path` always returns
    the inbound path.
    """

    predicate: PathPredicate

    @property
    def segments(self) -> tuple[str, ...]:
        return self.predicate.segments

    @override
    def on_match(self, request: RequestLike) -> None:
        remaining = split_path(request.path)[len(self.segments) :]
        _ = request.extensions.setdefault(ORIGINAL_PATH, request.path)
        request.path = PATH_SEPARATOR.join(remaining)
        logger.debug(
            "Rewrote path to %r (original %r)",
            request.path,
            request.extensions[ORIGINAL_PATH],
        )


def original_path(request: RequestLike) -> str | None:
    """Return the path the request had before any path fork rewrote it."""
    return request.extensions.get(ORIGINAL_PATH)


def _build(builder: PipelineBuilder, name: str) -> Pipeline:
    sub_pipeline = Pipeline(name=name)
    _ = builder(sub_pipeline)
    return sub_pipeline
