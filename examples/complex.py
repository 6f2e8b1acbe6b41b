"""Fork by header and by path prefix, each branch behind Basic auth."""

import asyncio
import base64
import binascii
import logging
from http import HTTPStatus

from typing_extensions import override

from pipework import (
    BaseMiddleware,
    CallNext,
    Fork,
    Handle,
    Pipeline,
    Request,
    RequestLike,
    Response,
)
from pipework.exceptions import NoHandlerError
from pipework.middleware import ExceptionMiddleware, LoggingMiddleware


def request_has_header(request: RequestLike, name: str, value: str) -> bool:
    return request.headers.get(name) == value


class WwwAuthenticate(BaseMiddleware):
    """Challenges every request for the configured username and password."""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    @override
    async def process(
        self,
        request: RequestLike,
        call_next: CallNext,
    ) -> Response:
        if not self._authorized(request.headers.get("Authorization", "")):
            response = Response.with_status(
                HTTPStatus.UNAUTHORIZED,
                "Unauthorized",
            )
            response.headers["WWW-Authenticate"] = "Basic"
            return response
        return await call_next(request)

    def _authorized(self, header: str) -> bool:
        scheme, _, token = header.partition(" ")
        if scheme != "Basic":
            return False
        try:
            decoded = base64.b64decode(token, validate=True).decode()
        except (binascii.Error, UnicodeDecodeError):
            return False
        username, _, password = decoded.partition(":")
        return username == self.username and password == self.password


class ApiV1Handler:
    def handle(self, _: RequestLike) -> Response:
        return Response(body="Handled by the V1 API")


class ApiV2Handler:
    def handle(self, _: RequestLike) -> Response:
        return Response(body="Handled by the V2 API")


def internal_error(exc: Exception, _: RequestLike) -> Response:
    return Response.with_status(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))


def build_v1(v1: Pipeline) -> None:
    v1.add(WwwAuthenticate("v1", "password"))
    v1.add(Handle(ApiV1Handler()))


def build_v2(v2: Pipeline) -> None:
    v2.add(WwwAuthenticate("v2", "password"))
    v2.add(Handle(ApiV2Handler()))


pipeline = Pipeline(name="app")
pipeline.add(LoggingMiddleware())
pipeline.add(ExceptionMiddleware({NoHandlerError: internal_error}))
pipeline.add(
    Fork.when(
        lambda req: request_has_header(req, "X-ApiVersion", "2009-01-01"),
        build_v1,
    ),
)
pipeline.add(Fork.when_path("/api/v2", build_v2))
pipeline.add(Handle(lambda _: Response.with_status(404, "Not Found")))


def basic(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {token}"


async def main() -> None:
    requests = [
        Request(path="/", headers={"X-ApiVersion": "2009-01-01"}),
        Request(
            path="/",
            headers={
                "X-ApiVersion": "2009-01-01",
                "Authorization": basic("v1", "password"),
            },
        ),
        Request(
            path="/api/v2/users",
            headers={"Authorization": basic("v2", "password")},
        ),
        Request(path="/nowhere"),
    ]
    for request in requests:
        response = await pipeline.dispatch(request)
        print(int(response.status), response.body.decode())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
