"""A minimal logging interface and a standard-error implementation."""

from __future__ import annotations

import json
import os
import re
import sys
from typing import Any, Protocol, runtime_checkable

_VERB = re.compile(r"%([-+# 0]*)(\d+)?(?:\.(\d+))?([a-zA-Z%])")


@runtime_checkable
class Logger(Protocol):
    """Something that prints formatted log lines."""

    def printf(self, format: str, *args: Any) -> None: ...

    def debugf(self, format: str, *args: Any) -> None: ...


def debug_enabled() -> bool:
    """Tell whether SWAGGER_DEBUG or DEBUG asks for debug output."""
    for name in ("SWAGGER_DEBUG", "DEBUG"):
        value = os.environ.get(name, "")
        if value and value not in ("false", "0"):
            return True
    return False


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)


def _render(flags: str, width: str | None, precision: str | None, verb: str, value: Any) -> str:
    numeric = False
    try:
        if verb in "vs":
            text = _text(value)
        elif verb == "q":
            text = json.dumps(_text(value), ensure_ascii=False)
        elif verb == "t":
            text = _text(bool(value))
        elif verb == "d":
            text = str(int(value))
            numeric = True
        elif verb in "xX":
            if isinstance(value, (bytes, bytearray)):
                text = bytes(value).hex()
            else:
                text = format(int(value), "x")
            text = text.upper() if verb == "X" else text
            numeric = True
        elif verb in "feEgG":
            spec = f".{precision}{verb}" if precision is not None else (
                "f" if verb == "f" else verb
            )
            text = format(float(value), spec)
            numeric = True
        else:
            return f"%!{verb}({type(value).__name__}={_text(value)})"
    except (TypeError, ValueError):
        return f"%!{verb}({type(value).__name__}={_text(value)})"
    if width:
        size = int(width)
        if "-" in flags:
            text = text.ljust(size)
        elif "0" in flags and numeric:
            sign = text[0] if text[:1] in "+-" else ""
            text = sign + text[len(sign):].rjust(size - len(sign), "0")
        else:
            text = text.rjust(size)
    return text


def _format(format: str, args: tuple[Any, ...]) -> str:
    values = iter(args)

    def replace(match: re.Match[str]) -> str:
        flags, width, precision, verb = match.groups()
        if verb == "%":
            return "%"
        try:
            value = next(values)
        except StopIteration:
            return f"%!{verb}(MISSING)"
        return _render(flags, width, precision, verb, value)

    out = _VERB.sub(replace, format)
    extra = list(values)
    if extra:
        out += "%!(EXTRA " + ", ".join(
            f"{type(v).__name__}={_text(v)}" for v in extra
        ) + ")"
    return out


class StandardLogger:
    """Writes each message as a line on standard error."""

    @staticmethod
    def _emit(format: str, args: tuple[Any, ...]) -> None:
        if not format.endswith("\n"):
            format += "\n"
        sys.stderr.write(_format(format, args))

    def printf(self, format: str, *args: Any) -> None:
        self._emit(format, args)

    def debugf(self, format: str, *args: Any) -> None:
        self._emit(format, args)