"""A URL router built on a double-array trie with path parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

PARAM_CHARACTER = ":"
"""Marks a named path parameter."""

WILDCARD_CHARACTER = "*"
"""Marks a wildcard path parameter that matches the rest of the path."""

TERMINATION_CHARACTER = "#"
"""Marks the end of a routing key."""

SEPARATOR_CHARACTER = "/"
"""Separates path segments."""

PATH_PARAM_CHARACTER = "="
"""Introduces a RESTCONF style path parameter."""

MAX_SIZE = (1 << 22) - 1
"""Largest number of records and of internal slots."""

_PARAM = ord(PARAM_CHARACTER)
_WILDCARD = ord(WILDCARD_CHARACTER)
_TERMINATION = ord(TERMINATION_CHARACTER)
_SEPARATOR = ord(SEPARATOR_CHARACTER)

_PARAM_SINGLE = 0x0100
_PARAM_WILDCARD = 0x0200
_PARAM_ANY = 0x0300
_EMPTY_MASK = 0xFFFFFCFF


class RouterError(ValueError):
    """The routing table could not be built."""


def next_separator(path: str | bytes, start: int) -> int:
    """Return the index of the next '/' or '#' in path at or after start."""
    separators = (_SEPARATOR, _TERMINATION) if isinstance(path, (bytes, bytearray)) else "/#"
    while start < len(path):
        if path[start] in separators:
            break
        start += 1
    return start


@dataclass(frozen=True)
class Param:
    """Name and value of one path parameter."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{{{self.name} {self.value}}}"


class Params(list):
    """Path parameters in the order they appear in the path."""

    def get(self, name: str) -> str:
        """Return the first value for name, or an empty string."""
        return next((p.value for p in self if p.name == name), "")

    def __str__(self) -> str:
        return "[" + " ".join(str(p) for p in self) + "]"


@dataclass
class Record:
    """A routing key and the value it resolves to."""

    key: str
    value: Any


@dataclass
class _Entry:
    key: bytes
    value: Any
    param_names: list[bytes] = field(default_factory=list)


@dataclass
class _Node:
    data: Any
    param_names: list[str]


def _make_node(entry: _Entry) -> _Node:
    seen: set[bytes] = set()
    for name in entry.param_names:
        if name in seen:
            raise RouterError(
                f"denco: path parameter `{name.decode()}' is duplicated "
                f"in the key `{entry.key.decode()}'"
            )
        seen.add(name)
    return _Node(entry.value, [n.decode() for n in entry.param_names])


def _make_siblings(
    entries: list[_Entry], depth: int
) -> tuple[list[tuple[int, int, int]], _Entry | None]:
    starts: list[list[int]] = []
    leaf = None
    previous = 0
    for i, entry in enumerate(entries):
        if len(entry.key) <= depth:
            leaf = entry
            continue
        c = entry.key[depth]
        if previous < c:
            if starts:
                starts[-1][1] = i
            starts.append([i, 0, c])
            previous = c
        elif previous == c:
            continue
        else:
            raise RouterError("denco: BUG: routing table hasn't been sorted")
    if starts:
        starts[-1][1] = len(entries)
    return [(s, e, c) for s, e, c in starts], leaf


class _DoubleArray:
    def __init__(self) -> None:
        # Slot 0 marks a missing node, so real nodes start at 1.
        self.bc: list[int] = [0]
        self.nodes: list[_Node | None] = [None]

    def lookup(
        self, path: bytes, params: list[bytes], idx: int
    ) -> tuple[_Node | None, list[bytes]] | None:
        bc = self.bc
        candidates: list[tuple[int, int]] = []
        matched = True
        for i, c in enumerate(path):
            if bc[idx] & _PARAM_ANY:
                candidates.append((i, idx))
            idx = (bc[idx] >> 10) ^ c
            if idx >= len(bc) or bc[idx] & 0xFF != c:
                matched = False
                break
        if matched:
            end = (bc[idx] >> 10) ^ _TERMINATION
            if end < len(bc) and bc[end] & 0xFF == _TERMINATION:
                return self.nodes[bc[end] >> 10], params

        for i, at in reversed(candidates):
            if bc[at] & _PARAM_SINGLE:
                child = (bc[at] >> 10) ^ _PARAM
                if child >= len(bc):
                    break
                end = next_separator(path, i)
                found = self.lookup(path[end:], params + [path[i:end]], child)
                if found is not None:
                    return found
            if bc[at] & _PARAM_WILDCARD:
                child = (bc[at] >> 10) ^ _WILDCARD
                return self.nodes[bc[child] >> 10], params + [path[i:]]
        return None

    def build(self, entries: list[_Entry], idx: int, depth: int, used: set[int]) -> None:
        entries.sort(key=lambda e: e.key)
        base, siblings, leaf = self._arrange(entries, idx, depth, used)
        if leaf is not None:
            node = _make_node(leaf)
            self.bc[idx] |= len(self.nodes) << 10
            self.nodes.append(node)
        for _, _, c in siblings:
            self.bc[base ^ c] |= c
        for start, end, c in siblings:
            group = entries[start:end]
            if c == _PARAM:
                for entry in group:
                    stop = next_separator(entry.key, depth + 1)
                    entry.param_names.append(entry.key[depth + 1:stop])
                    entry.key = entry.key[stop:]
                self.bc[idx] |= _PARAM_SINGLE
                self.build(group, base ^ c, 0, used)
            elif c == _WILDCARD:
                entry = group[0]
                entry.param_names.append(entry.key[depth + 1:len(entry.key) - 1])
                entry.key = b""
                self.bc[idx] |= _PARAM_WILDCARD
                self.build(group, base ^ c, 0, used)
            else:
                self.build(group, base ^ c, depth + 1, used)

    def _find_empty_index(self, start: int) -> int:
        i = start
        while i < len(self.bc) and self.bc[i] & _EMPTY_MASK:
            i += 1
        return i

    def _find_base(self, siblings: list[tuple[int, int, int]], start: int, used: set[int]) -> int:
        bc = self.bc
        first = siblings[0][2]
        idx = start + 1
        while True:
            base = idx ^ first
            if base not in used:
                fits = True
                for _, _, c in siblings:
                    slot = base ^ c
                    if len(bc) <= slot:
                        bc.extend([0] * (slot - len(bc) + 1))
                    if bc[slot] & _EMPTY_MASK:
                        fits = False
                        break
                if fits:
                    break
            idx = self._find_empty_index(idx + 1)
        used.add(base)
        return base

    def _arrange(
        self, entries: list[_Entry], idx: int, depth: int, used: set[int]
    ) -> tuple[int, list[tuple[int, int, int]], _Entry | None]:
        siblings, leaf = _make_siblings(entries, depth)
        if not siblings:
            return -1, [], leaf
        base = self._find_base(siblings, idx, used)
        if base > MAX_SIZE:
            raise RouterError("denco: too many elements of internal slice")
        self.bc[idx] |= base << 10
        return base, siblings, leaf


def _is_param_key(key: str) -> bool:
    return any(
        marker in key
        for marker in (
            SEPARATOR_CHARACTER + PARAM_CHARACTER,
            SEPARATOR_CHARACTER + WILDCARD_CHARACTER,
            PATH_PARAM_CHARACTER + PARAM_CHARACTER,
        )
    )


class Router:
    """Maps URL paths, static or with parameters, to values."""

    def __init__(self, size_hint: int = -1) -> None:
        self.size_hint = size_hint
        self._static: dict[str, Any] = {}
        self._param = _DoubleArray()

    def lookup(self, path: str) -> tuple[Any, Params, bool]:
        """Return the value for path, its parameters and whether it was found."""
        if path in self._static:
            return self._static[path], Params(), True
        if len(self._param.nodes) == 1:
            return None, Params(), False
        found = self._param.lookup(path.encode("utf-8"), [], 1)
        if found is None or found[0] is None:
            return None, Params(), False
        node, values = found
        params = Params(
            Param(name, value.decode("utf-8", errors="replace"))
            for name, value in zip(node.param_names, values)
        )
        return node.data, params, True

    def build(self, records: Iterable[Record]) -> None:
        """Add records to the routing table."""
        statics: list[Record] = []
        params: list[_Entry] = []
        for record in records:
            if _is_param_key(record.key):
                params.append(_Entry((record.key + TERMINATION_CHARACTER).encode("utf-8"), record.value))
            else:
                statics.append(record)
        if len(params) > MAX_SIZE:
            raise RouterError("denco: too many records")
        if self.size_hint < 0:
            self.size_hint = max(
                (sum(1 for c in e.key if c in (_PARAM, _WILDCARD)) for e in params),
                default=0,
            )
        for record in statics:
            self._static[record.key] = record.value
        self._param.build(params, 1, 0, set())