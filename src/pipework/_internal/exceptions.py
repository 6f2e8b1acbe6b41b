from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from pipework._internal.common.constants import PathErrorKind


class BasePipeworkError(Exception):
    pass


class NoHandlerError(BasePipeworkError):
    """Raised when the pipeline runs out of middleware for a request."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, msg: str = "Pipeline error (Missing handler)") -> None:
        super().__init__(msg)


class PathParseError(BasePipeworkError, ValueError):
    """Raised when a fork path prefix cannot be parsed into segments."""

    def __init__(self, path: str, kind: PathErrorKind) -> None:
        self.path: str = path
        self.kind: PathErrorKind = kind
        super().__init__(f"{kind.description}: {path!r}")


class RequestTimeoutError(BasePipeworkError):
    """Raised when the rest of the pipeline exceeds its deadline."""

    status: HTTPStatus = HTTPStatus.GATEWAY_TIMEOUT

    def __init__(self, timeout: float) -> None:
        self.timeout: float = timeout

        msg = (
            f"Request exceeded timeout of {timeout} seconds. "
            "Pipeline execution was interrupted."
        )
        super().__init__(msg)


class PipelineFrozenError(BasePipeworkError):
    """Raised when a pipeline is modified after it was closed."""

    def __init__(
        self,
        *,
        operation: str,
        reason: str,
        solution: str,
    ) -> None:
        self.operation: str = operation
        self.reason: str = reason
        self.solution: str = solution

        msg = (
            f"Cannot perform operation '{operation}'.\n"
            f"  Reason: {reason}\n"
            f"  Resolution: {solution}"
        )
        super().__init__(msg)


def raise_pipeline_frozen_error(operation: str) -> NoReturn:
    raise PipelineFrozenError(
        operation=operation,
        reason="The pipeline is closed and its middleware list is frozen.",
        solution=(
            "Middleware must be added BEFORE the first dispatch, and "
            "fork sub-pipelines only from inside their builder function."
        ),
    )
