"""CSV record reading and writing, plus the options of the CSV codec."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Iterator

_ERR_FIELD_COUNT = "wrong number of fields"
_ERR_BARE_QUOTE = 'bare " in non-quoted-field'
_ERR_QUOTE = 'extraneous or missing " in quoted-field'


class CSVError(ValueError):
    """A CSV record could not be parsed."""

    def __init__(self, start_line: int, line: int, column: int, reason: str) -> None:
        self.start_line = start_line
        self.line = line
        self.column = column
        self.reason = reason
        if reason == _ERR_FIELD_COUNT:
            message = f"record on line {line}: {reason}"
        elif start_line != line:
            message = (
                f"record on line {start_line}; parse error on line {line}, "
                f"column {column}: {reason}"
            )
        else:
            message = f"parse error on line {line}, column {column}: {reason}"
        super().__init__(message)


def _lines(stream: Any) -> Iterator[str]:
    """Yield the physical lines of a text or binary stream."""
    readline = getattr(stream, "readline", None)
    if readline is None:
        content = stream.read()
        if isinstance(content, (bytes, bytearray, memoryview)):
            content = bytes(content).decode("utf-8")
        yield from (content or "").splitlines(keepends=True)
        return
    while True:
        chunk = readline()
        if not chunk:
            return
        if isinstance(chunk, (bytes, bytearray, memoryview)):
            chunk = bytes(chunk).decode("utf-8")
        yield chunk


def _emit(stream: Any, text: str) -> None:
    if isinstance(stream, io.TextIOBase):
        stream.write(text)
    else:
        stream.write(text.encode("utf-8"))


class CSVReader:
    """Reads CSV records from a text or binary stream."""

    def __init__(
        self,
        stream: Any,
        comma: str = ",",
        comment: str = "",
        fields_per_record: int = 0,
        lazy_quotes: bool = False,
        trim_leading_space: bool = False,
    ) -> None:
        self.comma = comma
        self.comment = comment
        self.fields_per_record = fields_per_record
        self.lazy_quotes = lazy_quotes
        self.trim_leading_space = trim_leading_space
        self._source = _lines(stream)
        self._line_no = 0
        self._record_line = 0

    def _next_line(self) -> str | None:
        line = next(self._source, None)
        if line is None:
            return None
        self._line_no += 1
        if line.endswith("\r\n"):
            line = line[:-2] + "\n"
        elif not line.endswith("\n"):
            line += "\n"
        return line

    def _error(self, start: int, physical: str, rest: str, reason: str) -> CSVError:
        return CSVError(start, self._line_no, len(physical) - len(rest) + 1, reason)

    def _parse(self) -> list[str]:
        line = self._next_line()
        while line is not None and (
            (self.comment and line.startswith(self.comment)) or line == "\n"
        ):
            line = self._next_line()
        if line is None:
            raise EOFError("end of CSV input")
        start = self._line_no
        self._record_line = start
        physical = line
        comma = self.comma
        fields: list[str] = []
        while True:
            if self.trim_leading_space:
                line = line.lstrip()
            if not line or line[0] != '"':
                i = line.find(comma)
                value = line[:i] if i >= 0 else line.removesuffix("\n")
                if not self.lazy_quotes and '"' in value:
                    at = line[value.index('"'):]
                    raise self._error(start, physical, at, _ERR_BARE_QUOTE)
                fields.append(value)
                if i >= 0:
                    line = line[i + len(comma):]
                    continue
                return fields
            line = line[1:]
            parts: list[str] = []
            while True:
                i = line.find('"')
                if i >= 0:
                    parts.append(line[:i])
                    line = line[i + 1:]
                    if line.startswith('"'):
                        parts.append('"')
                        line = line[1:]
                    elif line.startswith(comma):
                        line = line[len(comma):]
                        fields.append("".join(parts))
                        break
                    elif line in ("", "\n"):
                        fields.append("".join(parts))
                        return fields
                    elif self.lazy_quotes:
                        parts.append('"')
                    else:
                        raise self._error(start, physical, line, _ERR_QUOTE)
                elif line:
                    parts.append(line)
                    nxt = self._next_line()
                    if nxt is None:
                        if not self.lazy_quotes:
                            raise self._error(start, physical, "", _ERR_QUOTE)
                        fields.append("".join(parts))
                        return fields
                    line = physical = nxt
                else:
                    if not self.lazy_quotes:
                        raise self._error(start, physical, line, _ERR_QUOTE)
                    fields.append("".join(parts))
                    return fields

    def read(self) -> list[str]:
        """Return the next record; raise EOFError when the input is exhausted."""
        record = self._parse()
        if self.fields_per_record > 0:
            if len(record) != self.fields_per_record:
                raise CSVError(self._record_line, self._record_line, 1, _ERR_FIELD_COUNT)
        elif self.fields_per_record == 0:
            self.fields_per_record = len(record)
        return record

    def read_all(self) -> list[list[str]]:
        """Return every remaining record."""
        return list(self)

    def __iter__(self) -> Iterator[list[str]]:
        while True:
            try:
                yield self.read()
            except EOFError:
                return


class CSVWriter:
    """Writes CSV records to a text or binary stream."""

    def __init__(self, stream: Any, comma: str = ",", use_crlf: bool = False) -> None:
        self.stream = stream
        self.comma = comma
        self.use_crlf = use_crlf
        self._pending: list[str] = []

    def _needs_quotes(self, value: str) -> bool:
        if value == "":
            return False
        if value == "\\.":
            return True
        if self.comma in value or any(c in value for c in '"\r\n'):
            return True
        return value[0].isspace()

    def _quote(self, value: str) -> str:
        if not self._needs_quotes(value):
            return value
        text = value.replace('"', '""')
        if self.use_crlf:
            text = text.replace("\r", "").replace("\n", "\r\n")
        return f'"{text}"'

    def write(self, record: list[str]) -> None:
        """Buffer one record."""
        newline = "\r\n" if self.use_crlf else "\n"
        self._pending.append(self.comma.join(self._quote(v) for v in record) + newline)

    def write_all(self, records: list[list[str]]) -> None:
        """Write several records and flush them."""
        for record in records:
            self.write(record)
        self.flush()

    def flush(self) -> None:
        """Send buffered records to the stream."""
        if self._pending:
            _emit(self.stream, "".join(self._pending))
            self._pending.clear()


@dataclass
class RecordsBuffer:
    """An in-memory container that is both a record reader and a record writer."""

    records: list[list[str]] = field(default_factory=list)
    _position: int = field(default=0, repr=False)

    def write(self, record: list[str]) -> None:
        self.records.append(record)

    def read(self) -> list[str]:
        if self._position >= len(self.records):
            raise EOFError("no more records")
        record = self.records[self._position]
        self._position += 1
        return record

    def flush(self) -> None:
        """Records are stored as written; keep the read position within them."""
        self._position = min(self._position, len(self.records))


@dataclass(frozen=True)
class CSVOptions:
    """Options of the CSV consumer and producer.

    Unset reader and writer separators keep the reader's and writer's own.
    """

    comma: str | None = None
    comment: str | None = None
    fields_per_record: int = 0
    lazy_quotes: bool = False
    trim_leading_space: bool = False
    writer_comma: str | None = None
    use_crlf: bool = False
    skip_lines: int = 0
    close_stream: bool = False

    def _apply_to_reader(self, reader: CSVReader) -> None:
        if self.comma:
            reader.comma = self.comma
        if self.comment:
            reader.comment = self.comment
        if self.fields_per_record:
            reader.fields_per_record = self.fields_per_record
        reader.lazy_quotes = self.lazy_quotes
        reader.trim_leading_space = self.trim_leading_space

    def _apply_to_writer(self, writer: CSVWriter) -> None:
        if self.writer_comma:
            writer.comma = self.writer_comma
        writer.use_crlf = self.use_crlf