"""Content-Type header parsing."""

from __future__ import annotations

import json
import string
from typing import Any

from .constants import CHARSET_KEY, DEFAULT_MIME, HEADER_CONTENT_TYPE

_TSPECIALS = frozenset('()<>@,;:\\"/[]?=')


class MediaTypeError(ValueError):
    """A media type value could not be parsed."""


class ParseError(ValueError):
    """A request value could not be parsed."""

    code = 400

    def __init__(self, name: str, in_: str, value: str, reason: Any) -> None:
        self.name = name
        self.in_ = in_
        self.value = value
        self.reason = reason
        quoted = json.dumps(value, ensure_ascii=False)
        if in_:
            message = f"parsing {name} {in_} from {quoted} failed, because {reason}"
        else:
            message = f"parsing {name} from {quoted} failed, because {reason}"
        super().__init__(message)


def _is_token_char(c: str) -> bool:
    return 0x20 < ord(c) < 0x7F and c not in _TSPECIALS


def _consume_token(v: str) -> tuple[str, str]:
    for i, c in enumerate(v):
        if not _is_token_char(c):
            return v[:i], v[i:]
    return v, ""


def _consume_value(v: str) -> tuple[str, str]:
    if not v:
        return "", v
    if v[0] != '"':
        return _consume_token(v)
    buffer = []
    i = 1
    while i < len(v):
        c = v[i]
        if c == '"':
            return "".join(buffer), v[i + 1:]
        if c == "\\" and i + 1 < len(v) and v[i + 1] in _TSPECIALS:
            buffer.append(v[i + 1])
            i += 1
        elif c in "\r\n":
            return "", v
        else:
            buffer.append(c)
        i += 1
    return "", v


def _consume_media_param(v: str) -> tuple[str, str, str]:
    rest = v.lstrip()
    if not rest.startswith(";"):
        return "", "", v
    rest = rest[1:].lstrip()
    param, rest = _consume_token(rest)
    param = param.lower()
    if not param:
        return "", "", v
    rest = rest.lstrip()
    if not rest.startswith("="):
        return "", "", v
    rest = rest[1:].lstrip()
    value, rest2 = _consume_value(rest)
    if not value and rest2 == rest:
        return "", "", v
    return param, value, rest2


def _check_media_type(s: str) -> None:
    typ, rest = _consume_token(s)
    if not typ:
        raise MediaTypeError("mime: no media type")
    if not rest:
        return
    if not rest.startswith("/"):
        raise MediaTypeError("mime: expected slash after first token")
    subtype, rest = _consume_token(rest[1:])
    if not subtype:
        raise MediaTypeError("mime: expected token after slash")
    if rest:
        raise MediaTypeError("mime: unexpected content after media subtype")


def _percent_unescape(s: str) -> str:
    out = bytearray()
    i = 0
    while i < len(s):
        if s[i] == "%":
            digits = s[i + 1:i + 3]
            if len(digits) < 2 or any(d not in string.hexdigits for d in digits):
                raise MediaTypeError(f"mime: bogus characters after %: {s[i:i + 3]!r}")
            out.append(int(digits, 16))
            i += 3
        else:
            out.extend(s[i].encode("utf-8"))
            i += 1
    return out.decode("utf-8", errors="replace")


def _decode_2231(v: str) -> str | None:
    parts = v.split("'", 2)
    if len(parts) != 3:
        return None
    charset = parts[0].lower()
    if charset not in ("us-ascii", "utf-8"):
        return None
    try:
        return _percent_unescape(parts[2])
    except MediaTypeError:
        return None


def _assemble_continuations(
    params: dict[str, str], continuation: dict[str, dict[str, str]]
) -> None:
    for key, pieces in continuation.items():
        single = pieces.get(key + "*")
        if single is not None:
            decoded = _decode_2231(single)
            if decoded is not None:
                params[key] = decoded
            continue
        parts: list[str] = []
        valid = False
        n = 0
        while True:
            simple = f"{key}*{n}"
            if simple in pieces:
                valid = True
                parts.append(pieces[simple])
                n += 1
                continue
            encoded = pieces.get(simple + "*")
            if encoded is None:
                break
            valid = True
            if n == 0:
                decoded = _decode_2231(encoded)
                if decoded is not None:
                    parts.append(decoded)
            else:
                try:
                    parts.append(_percent_unescape(encoded))
                except MediaTypeError:
                    pass
            n += 1
        if valid:
            params[key] = "".join(parts)


def parse_media_type(value: str) -> tuple[str, dict[str, str]]:
    """Parse a media type and its parameters, raising MediaTypeError when invalid."""
    base = value.split(";", 1)[0]
    media_type = base.lower().strip()
    _check_media_type(media_type)

    params: dict[str, str] = {}
    continuation: dict[str, dict[str, str]] = {}
    rest = value[len(base):]
    while rest:
        rest = rest.lstrip()
        if not rest:
            break
        key, val, remainder = _consume_media_param(rest)
        if not key:
            if remainder.strip() == ";":
                break
            raise MediaTypeError("mime: invalid media parameter")
        target = params
        if "*" in key:
            target = continuation.setdefault(key.split("*", 1)[0], {})
        if key in target and target[key] != val:
            raise MediaTypeError("mime: duplicate parameter name")
        target[key] = val
        rest = remainder

    _assemble_continuations(params, continuation)
    return media_type, params


def _header_value(headers: Any, name: str) -> str:
    if headers is None:
        return ""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            if isinstance(value, (list, tuple)):
                return value[0] if value else ""
            return value or ""
    return ""


def content_type(headers: Any) -> tuple[str, str]:
    """Return the media type and charset of the Content-Type header.

    A missing header yields the default binary media type.
    """
    raw = _header_value(headers, HEADER_CONTENT_TYPE)
    ct = raw or DEFAULT_MIME
    try:
        media_type, params = parse_media_type(ct)
    except MediaTypeError as exc:
        raise ParseError(HEADER_CONTENT_TYPE, "header", raw, exc) from exc
    return media_type, params.get(CHARSET_KEY, "")