"""Client-side response abstractions and the API error type."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Protocol, runtime_checkable


@runtime_checkable
class ClientResponse(Protocol):
    """A response obtained from any client transport."""

    @property
    def code(self) -> int: ...

    @property
    def message(self) -> str: ...

    def get_header(self, name: str) -> str: ...

    def get_headers(self, name: str) -> list[str]: ...

    def body(self) -> BinaryIO: ...


@runtime_checkable
class ClientResponseReader(Protocol):
    """Something that turns a client response into a value."""

    def read_response(self, response: ClientResponse, consumer: Any) -> Any: ...


@runtime_checkable
class ClientResponseStatus(Protocol):
    """Status predicates shared by generated responses."""

    def is_success(self) -> bool: ...

    def is_redirect(self) -> bool: ...

    def is_client_error(self) -> bool: ...

    def is_server_error(self) -> bool: ...

    def is_code(self, code: int) -> bool: ...


@dataclass(frozen=True)
class ClientResponseReaderFunc:
    """Adapts a plain function to the ClientResponseReader protocol."""

    fn: Callable[[ClientResponse, Any], Any]

    def read_response(self, response: ClientResponse, consumer: Any) -> Any:
        return self.fn(response, consumer)

    def __call__(self, response: ClientResponse, consumer: Any) -> Any:
        return self.read_response(response, consumer)


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


class APIError(Exception):
    """An error model returned by an API, with its status code."""

    def __init__(self, operation_name: str, response: Any, code: int) -> None:
        super().__init__(operation_name, response, code)
        self.operation_name = operation_name
        self.response = response
        self.code = code

    def __str__(self) -> str:
        if isinstance(self.response, BaseException):
            payload = f"'{self.response}'"
        else:
            try:
                payload = json.dumps(
                    self.response,
                    separators=(",", ":"),
                    ensure_ascii=False,
                    default=_json_default,
                )
            except (TypeError, ValueError):
                payload = ""
        return f"{self.operation_name} (status {self.code}): {payload}"

    def is_success(self) -> bool:
        return self.code // 100 == 2

    def is_redirect(self) -> bool:
        return self.code // 100 == 3

    def is_client_error(self) -> bool:
        return self.code // 100 == 4

    def is_server_error(self) -> bool:
        return self.code // 100 == 5

    def is_code(self, code: int) -> bool:
        return self.code == code