"""Protocols for consumers, producers, handlers and security hooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Consumer(Protocol):
    """Binds the content of a reader onto a destination object."""

    def consume(self, reader: Any, data: Any) -> None: ...


@runtime_checkable
class Producer(Protocol):
    """Writes a representation of data to a writer."""

    def produce(self, writer: Any, data: Any) -> None: ...


@runtime_checkable
class OperationHandler(Protocol):
    """Handles the bound parameters of an API operation."""

    def handle(self, data: Any) -> Any: ...


@runtime_checkable
class Authenticator(Protocol):
    """Turns request data into a principal.

    Returns ``(applies, principal)``; raises when authentication fails.
    """

    def authenticate(self, params: Any) -> tuple[bool, Any]: ...


@runtime_checkable
class Authorizer(Protocol):
    """Raises when the principal may not process the request."""

    def authorize(self, request: Any, principal: Any) -> None: ...


@runtime_checkable
class Validatable(Protocol):
    """Objects that validate themselves against a format registry."""

    def validate(self, formats: Any) -> None: ...


@runtime_checkable
class ContextValidatable(Protocol):
    """Objects that validate themselves within a context."""

    def context_validate(self, context: Any, formats: Any) -> None: ...


@dataclass(frozen=True)
class ConsumerFunc:
    """Adapts a plain function to the Consumer protocol."""

    fn: Callable[[Any, Any], None]

    def consume(self, reader: Any, data: Any) -> None:
        return self.fn(reader, data)

    def __call__(self, reader: Any, data: Any) -> None:
        return self.consume(reader, data)


@dataclass(frozen=True)
class ProducerFunc:
    """Adapts a plain function to the Producer protocol."""

    fn: Callable[[Any, Any], None]

    def produce(self, writer: Any, data: Any) -> None:
        return self.fn(writer, data)

    def __call__(self, writer: Any, data: Any) -> None:
        return self.produce(writer, data)


@dataclass(frozen=True)
class OperationHandlerFunc:
    """Adapts a plain function to the OperationHandler protocol."""

    fn: Callable[[Any], Any]

    def handle(self, data: Any) -> Any:
        return self.fn(data)

    def __call__(self, data: Any) -> Any:
        return self.handle(data)


@dataclass(frozen=True)
class AuthenticatorFunc:
    """Adapts a plain function to the Authenticator protocol."""

    fn: Callable[[Any], tuple[bool, Any]]

    def authenticate(self, params: Any) -> tuple[bool, Any]:
        return self.fn(params)

    def __call__(self, params: Any) -> tuple[bool, Any]:
        return self.authenticate(params)


@dataclass(frozen=True)
class AuthorizerFunc:
    """Adapts a plain function to the Authorizer protocol."""

    fn: Callable[[Any, Any], None]

    def authorize(self, request: Any, principal: Any) -> None:
        return self.fn(request, principal)

    def __call__(self, request: Any, principal: Any) -> None:
        return self.authorize(request, principal)


DISCARD_CONSUMER = ConsumerFunc(lambda _reader, _data: None)
"""A consumer that ignores its input."""

DISCARD_PRODUCER = ProducerFunc(lambda _writer, _data: None)
"""A producer that writes nothing."""