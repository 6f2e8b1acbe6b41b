from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

import pytest

from pipework import Handle, HandleNext, Request, Response

if TYPE_CHECKING:
    from pipework import CallNext, RequestLike


def create_request(
    path: str = "/",
    method: str = "GET",
    **headers: str,
) -> Request:
    return Request(
        method=method,
        path=path,
        headers={k.replace("_", "-"): v for k, v in headers.items()},
    )


def respond(status: HTTPStatus, body: str = "") -> Handle:
    def _respond(_: RequestLike) -> Response:
        return Response.with_status(status, body)

    return Handle(_respond)


def echo_path(separator: str = ":") -> Handle:
    def _echo(request: RequestLike) -> Response:
        segments = [s for s in request.path.split("/") if s]
        return Response(body=separator.join(segments))

    return Handle(_echo)


class Trace:
    """Records the order middleware run in, on the way in and out."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def middleware(self, name: str) -> HandleNext:
        async def _traced(
            request: RequestLike,
            call_next: CallNext,
        ) -> Response:
            self.events.append(f"{name}:in")
            response = await call_next(request)
            self.events.append(f"{name}:out")
            return response

        return HandleNext(_traced)

    def passthrough(self, name: str) -> HandleNext:
        async def _passthrough(
            request: RequestLike,
            call_next: CallNext,
        ) -> Response:
            self.events.append(name)
            return await call_next(request)

        return HandleNext(_passthrough)

    def terminal(
        self,
        name: str,
        status: HTTPStatus = HTTPStatus.OK,
    ) -> Handle:
        def _terminal(_: RequestLike) -> Response:
            self.events.append(name)
            return Response.with_status(status, name)

        return Handle(_terminal)


@pytest.fixture
def trace() -> Trace:
    return Trace()
