import asyncio
from http import HTTPStatus
from unittest import mock

import pytest

from pipework import (
    CallNext,
    Handle,
    HandleNext,
    Next,
    Pipeline,
    RequestLike,
    Response,
)
from pipework.exceptions import NoHandlerError, PipelineFrozenError
from tests.conftest import Trace, create_request, respond


async def test_handle() -> None:
    pipeline = Pipeline()
    pipeline.add(respond(HTTPStatus.OK, "Hello, world"))

    response = await pipeline.dispatch(create_request(method="HEAD"))

    assert response.status is HTTPStatus.OK
    assert response.body == b"Hello, world"


async def test_handle_async_function() -> None:
    async def hello(_: RequestLike) -> Response:
        return Response(body="async")

    pipeline = Pipeline([Handle(hello)])

    response = await pipeline(create_request())
    assert response.body == b"async"


async def test_handle_next_overrides_status() -> None:
    async def override_status(
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        response = await call_next(request)
        response.status = HTTPStatus.INTERNAL_SERVER_ERROR
        return response

    pipeline = Pipeline()
    pipeline.add(HandleNext(override_status))
    pipeline.add(respond(HTTPStatus.OK))

    response = await pipeline.dispatch(create_request(method="HEAD"))
    assert response.status is HTTPStatus.INTERNAL_SERVER_ERROR


async def test_empty_pipeline() -> None:
    pipeline = Pipeline()

    with pytest.raises(NoHandlerError, match="Missing handler") as e:
        _ = await pipeline.dispatch(create_request())

    assert e.value.status is HTTPStatus.INTERNAL_SERVER_ERROR


async def test_every_middleware_delegates(trace: Trace) -> None:
    pipeline = Pipeline([trace.passthrough("a"), trace.passthrough("b")])

    with pytest.raises(NoHandlerError):
        _ = await pipeline.dispatch(create_request())

    assert trace.events == ["a", "b"]


async def test_first_short_circuit_wins(trace: Trace) -> None:
    pipeline = Pipeline(
        [
            trace.passthrough("a"),
            trace.terminal("b", HTTPStatus.ACCEPTED),
            trace.terminal("c"),
            trace.passthrough("d"),
        ],
    )

    response = await pipeline.dispatch(create_request())

    assert response.status is HTTPStatus.ACCEPTED
    assert response.body == b"b"
    assert trace.events == ["a", "b"]


async def test_onion_order(trace: Trace) -> None:
    pipeline = Pipeline()
    pipeline.add(trace.middleware("outer"))
    pipeline.add(trace.middleware("inner"))
    pipeline.add(trace.terminal("handler"))

    _ = await pipeline.dispatch(create_request())

    assert trace.events == [
        "outer:in",
        "inner:in",
        "handler",
        "inner:out",
        "outer:out",
    ]


async def test_middleware_can_mutate_request() -> None:
    async def add_header(
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        request.headers["X-Seen"] = "yes"
        return await call_next(request)

    def read_header(request: RequestLike) -> Response:
        return Response(body=request.headers["x-seen"])

    pipeline = Pipeline([HandleNext(add_header), Handle(read_header)])

    response = await pipeline.dispatch(create_request())
    assert response.body == b"yes"


async def test_failure_propagates_through_wrappers(trace: Trace) -> None:
    def fail(_: RequestLike) -> Response:
        raise ZeroDivisionError

    pipeline = Pipeline([trace.middleware("outer"), Handle(fail)])

    with pytest.raises(ZeroDivisionError):
        _ = await pipeline.dispatch(create_request())

    assert trace.events == ["outer:in"]


async def test_next_is_bound_to_position() -> None:
    seen: list[Next] = []

    async def capture(request: RequestLike, call_next: CallNext) -> Response:
        seen.append(call_next)
        return await call_next.invoke(request)

    pipeline = Pipeline([HandleNext(capture), respond(HTTPStatus.OK)])
    _ = await pipeline.dispatch(create_request())

    assert seen == [Next(pipeline, 1)]
    with pytest.raises(AttributeError):
        seen[0].index = 5  # type: ignore[misc]


async def test_pipeline_as_handler() -> None:
    inner = Pipeline([respond(HTTPStatus.CREATED, "inner")])
    outer = Pipeline([Handle(inner)])

    response = await outer.dispatch(create_request())

    assert response.status is HTTPStatus.CREATED
    assert response.body == b"inner"


async def test_handler_object() -> None:
    class ApiHandler:
        def handle(self, _: RequestLike) -> Response:
            return Response(body="Handled by the API")

    pipeline = Pipeline([Handle(ApiHandler())])

    response = await pipeline.dispatch(create_request())
    assert response.body == b"Handled by the API"


async def test_frozen_after_dispatch() -> None:
    pipeline = Pipeline([respond(HTTPStatus.OK)], name="app")
    assert pipeline.frozen is False
    assert len(pipeline) == 1
    assert repr(pipeline) == "<Pipeline 'app' middleware=1>"

    _ = await pipeline.dispatch(create_request())
    assert pipeline.frozen is True

    reason = "The pipeline is closed and its middleware list is frozen."
    with pytest.raises(PipelineFrozenError, match=reason) as e:
        pipeline.add(respond(HTTPStatus.OK))

    assert e.value.operation == "add"
    assert len(pipeline) == 1


async def test_concurrent_requests_share_pipeline() -> None:
    async def echo(request: RequestLike) -> Response:
        return Response(body=request.path)

    pipeline = Pipeline([Handle(echo)])
    requests = [create_request(f"/{i}") for i in range(10)]

    responses = await asyncio.gather(*map(pipeline.dispatch, requests))

    assert [r.body for r in responses] == [f"/{i}".encode() for i in range(10)]


async def test_handle_next_receives_request_and_next() -> None:
    func = mock.AsyncMock(return_value=Response())
    pipeline = Pipeline([HandleNext(func)])
    request = create_request()

    _ = await pipeline.dispatch(request)

    func.assert_awaited_once_with(request, Next(pipeline, 1))
