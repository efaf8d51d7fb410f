"""JSON consumer and producer."""

from __future__ import annotations

import dataclasses
import io
import json
from typing import Any

from .interfaces import ConsumerFunc, ProducerFunc

_DECODER = json.JSONDecoder()


def _read_text(reader: Any) -> str:
    chunk = reader.read()
    if isinstance(chunk, (bytes, bytearray, memoryview)):
        return bytes(chunk).decode("utf-8")
    return chunk or ""


def _decode_first(text: str) -> Any:
    stripped = text.lstrip()
    if not stripped:
        raise EOFError("unexpected end of JSON input")
    value, _ = _DECODER.raw_decode(stripped)
    return value


def _bind(value: Any, data: Any) -> None:
    if isinstance(data, dict):
        if not isinstance(value, dict):
            raise TypeError(f"cannot decode JSON {type(value).__name__} into a dict")
        data.update(value)
        return
    if isinstance(data, list):
        if not isinstance(value, list):
            raise TypeError(f"cannot decode JSON {type(value).__name__} into a list")
        data[:] = value
        return
    if hasattr(data, "__dict__") and not isinstance(data, type):
        if not isinstance(value, dict):
            raise TypeError(
                f"cannot decode JSON {type(value).__name__} into {type(data).__name__}"
            )
        fields = [name for name in vars(data) if not name.startswith("_")]
        by_lower = {}
        for name in fields:
            by_lower.setdefault(name.lower(), name)
        for key, item in value.items():
            target = key if key in fields else by_lower.get(key.lower())
            if target is not None:
                setattr(data, target, item)
        return
    raise TypeError(f"cannot decode JSON into {type(data).__name__}")


def _consume(reader: Any, data: Any) -> None:
    if reader is None:
        raise TypeError("JSON consumer requires a reader")
    if data is None:
        raise TypeError("nil destination for JSON consumer")
    _bind(_decode_first(_read_text(reader)), data)


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _produce(writer: Any, data: Any) -> None:
    if writer is None:
        raise TypeError("JSON producer requires a writer")
    text = json.dumps(
        data, separators=(",", ":"), ensure_ascii=False, default=_json_default
    ) + "\n"
    if isinstance(writer, io.TextIOBase):
        writer.write(text)
    else:
        writer.write(text.encode("utf-8"))


def json_consumer() -> ConsumerFunc:
    """Return a consumer that decodes one JSON value into a dict, list or object."""
    return ConsumerFunc(_consume)


def json_producer() -> ProducerFunc:
    """Return a producer that writes compact JSON followed by a newline."""
    return ProducerFunc(_produce)