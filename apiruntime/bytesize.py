"""Human-readable byte sizes for command-line flags."""

from __future__ import annotations

import math

_DECIMAL_ABBRS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
_DECIMAL_MAP = {
    "k": 1_000,
    "m": 1_000_000,
    "g": 1_000_000_000,
    "t": 1_000_000_000_000,
    "p": 1_000_000_000_000_000,
}
_NUMBER_CHARS = "01234567890. "


def human_size(size: float) -> str:
    """Format a size in decimal units with four significant digits, e.g. ``1.024kB``."""
    value = float(size)
    index = 0
    while value >= 1000 and index < len(_DECIMAL_ABBRS) - 1:
        value /= 1000
        index += 1
    return f"{value:.4g}{_DECIMAL_ABBRS[index]}"


def _parse_float(num: str) -> float:
    if num != num.strip() or "_" in num or not num:
        raise ValueError(f'strconv.ParseFloat: parsing "{num}": invalid syntax')
    try:
        return float(num)
    except ValueError:
        raise ValueError(f'strconv.ParseFloat: parsing "{num}": invalid syntax') from None


def from_human_size(text: str) -> int:
    """Parse a decimal size such as ``10MB`` or ``1.5 kB`` into bytes."""
    sep = max(text.rfind(c) for c in _NUMBER_CHARS)
    if sep == -1:
        raise ValueError(f"invalid size: '{text}'")
    if text[sep] != " ":
        num, suffix = text[:sep + 1], text[sep + 1:]
    else:
        num, suffix = text[:sep], text[sep + 1:]

    size = _parse_float(num)
    if size < 0 or not math.isfinite(size):
        raise ValueError(f"invalid size: '{text}'")
    if not suffix:
        return int(size)

    if len(suffix) > 3:
        raise ValueError(f"invalid suffix: '{suffix}'")
    suffix = suffix.lower()
    if suffix[0] == "b":
        if len(suffix) > 1:
            raise ValueError(f"invalid suffix: '{suffix}'")
        return int(size)
    multiplier = _DECIMAL_MAP.get(suffix[0])
    if multiplier is None:
        raise ValueError(f"invalid suffix: '{suffix}'")
    if (len(suffix) == 2 and suffix[1] != "b") or (len(suffix) == 3 and suffix[1:] != "ib"):
        raise ValueError(f"invalid suffix: '{suffix}'")
    return int(size * multiplier)


class ByteSize(int):
    """A byte count that reads and prints in human units."""

    def marshal_flag(self) -> str:
        return human_size(self)

    @classmethod
    def unmarshal_flag(cls, value: str) -> "ByteSize":
        return cls(from_human_size(value))

    def type_name(self) -> str:
        return "byte-size"

    def __str__(self) -> str:
        return human_size(self)