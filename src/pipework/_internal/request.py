from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pipework._internal.common.datastructures import Extensions, Headers

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping


@runtime_checkable
class RequestLike(Protocol):
    """The part of a request the pipeline and forks rely on."""

    method: str
    path: str
    headers: Mapping[str, str]
    extensions: MutableMapping[str, Any]


@dataclass(slots=True, kw_only=True)
class Request:
    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    extensions: Extensions = field(default_factory=Extensions)
    body: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)
        if not isinstance(self.extensions, Extensions):
            self.extensions = Extensions(dict(self.extensions))


@dataclass(slots=True, kw_only=True)
class Response:
    status: HTTPStatus = HTTPStatus.OK
    body: bytes = b""
    headers: Headers = field(default_factory=Headers)

    def __post_init__(self) -> None:
        self.status = HTTPStatus(self.status)
        if isinstance(self.body, str):
            self.body = self.body.encode()
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)

    @classmethod
    def with_status(
        cls,
        status: HTTPStatus | int,
        body: bytes | str = b"",
    ) -> Response:
        return cls(status=HTTPStatus(status), body=body)  # pyright: ignore[reportArgumentType]
