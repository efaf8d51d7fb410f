"""CSV consumer and producer."""

from __future__ import annotations

import io
from typing import Any

from .csvio import CSVOptions, CSVReader, CSVWriter, RecordsBuffer
from .interfaces import ConsumerFunc, ProducerFunc


def _skip(reader: Any, count: int) -> bool:
    """Skip header records; return False when the input ran out."""
    for _ in range(count):
        try:
            reader.read()
        except EOFError:
            return False
    return True


def _pipe(writer: Any, reader: Any, options: CSVOptions) -> None:
    if not _skip(reader, options.skip_lines):
        return
    while True:
        try:
            record = reader.read()
        except EOFError:
            break
        writer.write(record)
    writer.flush()


def _buffered(writer: CSVWriter, reader: CSVReader, options: CSVOptions) -> None:
    if not _skip(reader, options.skip_lines):
        return
    writer.write_all(reader.read_all())


def _buffered_bytes(reader: CSVReader, options: CSVOptions) -> bytes:
    out = io.StringIO()
    writer = CSVWriter(out)
    options._apply_to_writer(writer)
    _buffered(writer, reader, options)
    return out.getvalue().encode("utf-8")


def _close(stream: Any) -> None:
    close = getattr(stream, "close", None)
    if callable(close):
        close()


def csv_consumer(options: CSVOptions | None = None) -> ConsumerFunc:
    """Return a consumer that copies CSV records from a reader into a destination.

    Destinations: CSVWriter, RecordsBuffer, writable streams, objects with
    ``read_from`` or ``unmarshal_binary``, a list (of records) or a bytearray.
    """
    opts = options or CSVOptions()

    def consume(reader: Any, data: Any) -> None:
        if reader is None:
            raise ValueError("CSVConsumer requires a reader")
        if data is None:
            raise ValueError("nil destination for CSVConsumer")
        csv_reader = CSVReader(reader)
        opts._apply_to_reader(csv_reader)
        try:
            _consume_into(csv_reader, data)
        finally:
            if opts.close_stream:
                _close(reader)

    def _consume_into(csv_reader: CSVReader, data: Any) -> None:
        if isinstance(data, CSVWriter):
            opts._apply_to_writer(data)
            _pipe(data, csv_reader, opts)
        elif isinstance(data, RecordsBuffer):
            _pipe(data, csv_reader, opts)
        elif callable(getattr(data, "write", None)) and not isinstance(data, bytearray):
            writer = CSVWriter(data)
            opts._apply_to_writer(writer)
            _pipe(writer, csv_reader, opts)
        elif callable(getattr(data, "read_from", None)):
            data.read_from(io.BytesIO(_buffered_bytes(csv_reader, opts)))
        elif callable(getattr(data, "unmarshal_binary", None)):
            data.unmarshal_binary(_buffered_bytes(csv_reader, opts))
        elif isinstance(data, list):
            records = RecordsBuffer()
            _pipe(records, csv_reader, opts)
            data[:] = records.records
        elif isinstance(data, bytearray):
            data[:] = _buffered_bytes(csv_reader, opts)
        elif isinstance(data, (bytes, str, tuple)):
            raise TypeError("destination must be mutable")
        else:
            raise TypeError(
                f"{data!r} ({type(data).__name__}) is not supported by the CSVConsumer, "
                "can be resolved by supporting CSVWriter/Writer/BinaryUnmarshaler interface"
            )

    return ConsumerFunc(consume)


def csv_producer(options: CSVOptions | None = None) -> ProducerFunc:
    """Return a producer that writes data as CSV to a writer.

    Inputs: CSVReader, RecordsBuffer, readable streams, objects with ``write_to``
    or ``marshal_binary``, a list of records, bytes or str.
    """
    opts = options or CSVOptions()

    def produce(writer: Any, data: Any) -> None:
        if writer is None:
            raise ValueError("CSVProducer requires a writer")
        if data is None:
            raise ValueError("nil data for CSVProducer")
        csv_writer = CSVWriter(writer)
        opts._apply_to_writer(csv_writer)
        try:
            _produce_from(csv_writer, data)
        finally:
            if callable(getattr(data, "read", None)):
                _close(data)
            if opts.close_stream:
                _close(writer)

    def _reader_for(stream: Any) -> CSVReader:
        reader = CSVReader(stream)
        opts._apply_to_reader(reader)
        return reader

    def _produce_from(csv_writer: CSVWriter, data: Any) -> None:
        if isinstance(data, CSVReader):
            opts._apply_to_reader(data)
            _pipe(csv_writer, data, opts)
        elif isinstance(data, RecordsBuffer):
            _pipe(csv_writer, data, opts)
        elif callable(getattr(data, "read", None)):
            _pipe(csv_writer, _reader_for(data), opts)
        elif callable(getattr(data, "write_to", None)):
            sink = io.BytesIO()
            data.write_to(sink)
            sink.seek(0)
            _pipe(csv_writer, _reader_for(sink), opts)
        elif callable(getattr(data, "marshal_binary", None)):
            _buffered(csv_writer, CSVReader(io.BytesIO(data.marshal_binary())), opts)
        elif isinstance(data, list):
            _pipe(csv_writer, RecordsBuffer(list(data)), opts)
        elif isinstance(data, (bytes, bytearray, memoryview)):
            _buffered(csv_writer, _reader_for(io.BytesIO(bytes(data))), opts)
        elif isinstance(data, str):
            _buffered(csv_writer, _reader_for(io.StringIO(data)), opts)
        else:
            raise TypeError(
                f"{data!r} ({type(data).__name__}) is not supported by the CSVProducer, "
                "can be resolved by supporting CSVReader/Reader/BinaryMarshaler interface"
            )

    return ProducerFunc(produce)