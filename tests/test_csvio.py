import io

import pytest

from apiruntime.csvio import CSVError, CSVOptions, CSVReader, CSVWriter, RecordsBuffer

CSV_FIXTURE = "name,country,age\nJohn,US,19\nMike,US,20\n"
BAD_FIXTURE = "name,country,age\nJohn,US,19\nMike,US\n"
RECORDS = [["name", "country", "age"], ["John", "US", "19"], ["Mike", "US", "20"]]


def test_reader_reads_all_records():
    assert CSVReader(io.StringIO(CSV_FIXTURE)).read_all() == RECORDS


def test_reader_accepts_bytes_streams():
    assert CSVReader(io.BytesIO(CSV_FIXTURE.encode())).read_all() == RECORDS


def test_reader_raises_eof_at_end():
    reader = CSVReader(io.StringIO("a,b\n"))
    assert reader.read() == ["a", "b"]
    with pytest.raises(EOFError):
        reader.read()


def test_reader_field_count_error():
    with pytest.raises(CSVError) as info:
        CSVReader(io.StringIO(BAD_FIXTURE)).read_all()
    assert str(info.value) == "record on line 3: wrong number of fields"


def test_reader_unterminated_quote_spans_lines():
    text = CSV_FIXTURE.replace(",age", ',"age')
    with pytest.raises(CSVError) as info:
        CSVReader(io.StringIO(text)).read()
    assert str(info.value).startswith("record on line 1; parse error")


def test_reader_comment_lines_are_skipped():
    text = "# heading\n" + CSV_FIXTURE
    assert CSVReader(io.StringIO(text), comment="#").read_all() == RECORDS


def test_writer_round_trip_with_quoting():
    records = [["a,b", 'say "hi"', ""], ["multi\nline", " lead", "x"]]
    out = io.StringIO()
    CSVWriter(out).write_all(records)
    assert CSVReader(io.StringIO(out.getvalue())).read_all() == records


def test_writer_quotes_field_with_separator():
    out = io.StringIO()
    CSVWriter(out).write_all([["a,b", "c"]])
    assert out.getvalue() == '"a,b",c\n'


def test_writer_crlf_line_endings():
    out = io.StringIO()
    CSVWriter(out, use_crlf=True).write_all([["a", "b"]])
    assert out.getvalue().endswith("\r\n")


def test_writer_buffers_until_flush():
    out = io.StringIO()
    writer = CSVWriter(out)
    writer.write(["a"])
    assert out.getvalue() == ""
    writer.flush()
    assert out.getvalue() == "a\n"


def test_records_buffer_round_trip():
    buffer = RecordsBuffer()
    for record in RECORDS:
        buffer.write(record)
    assert [buffer.read() for _ in RECORDS] == RECORDS
    with pytest.raises(EOFError):
        buffer.read()


def test_options_apply_to_reader_and_writer():
    options = CSVOptions(comma=";", writer_comma="|", fields_per_record=3)
    reader = CSVReader(io.StringIO(CSV_FIXTURE.replace(",", ";")))
    options._apply_to_reader(reader)
    records = reader.read_all()
    assert records == RECORDS
    out = io.StringIO()
    writer = CSVWriter(out)
    options._apply_to_writer(writer)
    writer.write_all(records)
    assert out.getvalue() == CSV_FIXTURE.replace(",", "|")