# ruff: noqa: ANN401
from __future__ import annotations

from collections import UserDict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class Extensions(UserDict[str, Any]):
    """Per-request storage for values attached by middleware."""

    def __init__(self, extensions: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportMissingSuperCall]
        object.__setattr__(self, "data", extensions or {})

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "data":
            object.__setattr__(self, key, value)
        else:
            self[key] = value

    def __getattr__(self, key: str) -> Any:
        # only reached when normal lookup fails, e.g. on a half-built copy
        if key == "data" or key.startswith("__"):
            raise AttributeError(key)
        try:
            return self.data[key]
        except KeyError as exc:
            message = (
                f"{self.__class__.__name__!r} object has no attribute {key!r}"
            )
            raise AttributeError(message) from exc

    def __delattr__(self, key: str) -> None:
        del self[key]

    def __str__(self) -> str:
        cls_name = type(self).__name__
        return f"{cls_name}({super().__str__()})"


class Headers(UserDict[str, str]):
    """Header map with case-insensitive names.

    Names are stored lower-cased, so ``headers["X-Api"]`` and
    ``headers["x-api"]`` refer to the same entry.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> None:
        super().__init__()
        if headers is not None:
            self.update(headers)

    def __setitem__(self, key: str, value: str) -> None:
        self.data[key.lower()] = value

    def __getitem__(self, key: str) -> str:
        return self.data[key.lower()]

    def __delitem__(self, key: str) -> None:
        del self.data[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self.data
