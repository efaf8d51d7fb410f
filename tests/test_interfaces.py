import io

import pytest

from apiruntime.interfaces import (
    DISCARD_CONSUMER,
    DISCARD_PRODUCER,
    AuthenticatorFunc,
    AuthorizerFunc,
    Consumer,
    ConsumerFunc,
    OperationHandlerFunc,
    Producer,
    ProducerFunc,
)


def test_consumer_func_delegates():
    def fill(reader, data):
        data["body"] = reader.read()

    consumer = ConsumerFunc(fill)
    target = {}
    consumer.consume(io.StringIO("content"), target)
    assert target == {"body": "content"}
    assert isinstance(consumer, Consumer)


def test_producer_func_delegates():
    def write(writer, data):
        writer.write(data)

    producer = ProducerFunc(write)
    out = io.StringIO()
    producer.produce(out, "payload")
    assert out.getvalue() == "payload"
    assert isinstance(producer, Producer)


def test_operation_handler_func_returns_result():
    handler = OperationHandlerFunc(lambda data: [data, data])
    assert handler.handle("x") == ["x", "x"]


def test_operation_handler_func_propagates_error():
    def fail(_data):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        OperationHandlerFunc(fail).handle(None)


def test_authenticator_func_returns_tuple():
    auth = AuthenticatorFunc(lambda params: (True, params["user"]))
    assert auth.authenticate({"user": "admin"}) == (True, "admin")


def test_authorizer_func_raises_on_denial():
    def deny(request, principal):
        if principal != request:
            raise PermissionError(principal)

    authorizer = AuthorizerFunc(deny)
    assert authorizer.authorize("admin", "admin") is None
    with pytest.raises(PermissionError):
        authorizer.authorize("admin", "other")


def test_discard_consumer_leaves_data_untouched():
    target = {"keep": 1}
    reader = io.StringIO("ignored")
    DISCARD_CONSUMER.consume(reader, target)
    assert target == {"keep": 1}
    assert reader.tell() == 0


def test_discard_producer_writes_nothing():
    out = io.BytesIO()
    DISCARD_PRODUCER.produce(out, {"a": 1})
    assert out.getvalue() == b""