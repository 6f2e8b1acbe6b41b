"""Log every request, then answer it."""

import asyncio
import logging

from pipework import CallNext, Handle, HandleNext, Pipeline, Request, Response

logger = logging.getLogger("examples.simple")


async def log_requests(request: Request, call_next: CallNext) -> Response:
    logger.info("%s %s", request.method, request.path)
    response = await call_next(request)
    logger.info("%d", response.status)
    return response


def hello(request: Request) -> Response:
    return Response(body=f"Hello from pipework: {request.path}")


pipeline = Pipeline()
pipeline.add(HandleNext(log_requests))
pipeline.add(Handle(hello))


async def main() -> None:
    response = await pipeline.dispatch(Request(path="/world"))
    print(response.body.decode())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
