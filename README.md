# apiruntime

Small, dependency-free building blocks for serving and consuming HTTP APIs.

## What is in the package

- `apiruntime.interfaces`: the `Consumer`, `Producer`, `OperationHandler`,
  `Authenticator`, `Authorizer`, `Validatable` and `ContextValidatable`
  protocols. `ConsumerFunc`, `ProducerFunc`, `OperationHandlerFunc`,
  `AuthenticatorFunc` and `AuthorizerFunc` wrap a plain function so that it
  fits one of these protocols. `DISCARD_CONSUMER` and `DISCARD_PRODUCER` do
  nothing.
- `apiruntime.jsoncodec`: `json_consumer()` decodes one JSON value from a
  reader into a dict, a list or an object's public attributes. Attribute
  names are matched exactly first and then without regard to case.
  `json_producer()` writes compact JSON followed by a newline, to a text
  stream or a binary stream.
- `apiruntime.csvio`: `CSVReader` and `CSVWriter` read and write records. The
  separator, the comment prefix, the field count, lazy quotes, leading-space
  trimming and CRLF line endings can be set. A malformed record raises
  `CSVError`. `RecordsBuffer` holds records in memory and can be both read
  and written. `CSVOptions` configures the CSV codec.
- `apiruntime.csvcodec`: `csv_consumer(options)` copies CSV from a reader into
  any of these: a `CSVWriter`, a `RecordsBuffer`, a writable stream, an object
  with `read_from` or `unmarshal_binary`, a list (filled with records) or a
  `bytearray`. `csv_producer(options)` writes CSV from any of these: a
  `CSVReader`, a `RecordsBuffer`, a readable stream (closed afterwards), an
  object with `write_to` or `marshal_binary`, a list of records, `bytes` or
  `str`. `CSVOptions(skip_lines=...)` skips header records.
  `close_stream=True` closes the reader (consumer) or the writer (producer)
  when done.
- `apiruntime.headers`: `content_type(headers)` returns the media type and
  charset of a `Content-Type` header. A missing header gives
  `application/octet-stream`. A malformed value raises `ParseError`, which
  has `code = 400`. `parse_media_type(value)` returns the lower-cased media
  type and its parameters, and raises `MediaTypeError` on a bad value.
- `apiruntime.client_response`: the `ClientResponse`, `ClientResponseReader`
  and `ClientResponseStatus` protocols, and `ClientResponseReaderFunc`.
  `APIError(operation_name, response, code)` is an exception. Its message
  embeds the payload as JSON, or as a quoted error message when the payload
  is itself an exception. It provides `is_success()`, `is_redirect()`,
  `is_client_error()`, `is_server_error()` and `is_code(code)`.
- `apiruntime.bytesize`: `human_size(size)` formats sizes in decimal units,
  for example `1.024kB`. `from_human_size(text)` parses sizes such as `2MB`
  or `1.5 kB` into bytes. `ByteSize` is an `int` that has `marshal_flag()`,
  `unmarshal_flag(value)` (a class method), `type_name()` (`"byte-size"`) and
  a human-readable `str()`.
- `apiruntime.logger`: the `Logger` protocol and `StandardLogger`. The
  logger's `printf` and `debugf` write printf-style formatted lines
  (`%s`, `%v`, `%q`, `%d`, `%x`, `%f`, ...) to standard error.
  `debug_enabled()` is true when `SWAGGER_DEBUG` or `DEBUG` is set to
  anything other than an empty value, `false` or `0`.
- `apiruntime.denco.router`: `Router` is a double-array URL router. It
  supports static paths, `:param` segments, `*wildcard` tails and `=:param`
  parameters. `Router.build(records)` takes `Record(key, value)` items and
  raises `RouterError` on duplicate parameter names. `Router.lookup(path)`
  returns `(value, params, found)`, where `params` is a `Params` list of
  `Param(name, value)` with a `get(name)` method. `next_separator(path, start)`
  finds the next `/` or `#`.
- `apiruntime.denco.server`: `Mux` collects `Handler`s through `get`, `post`,
  `put`, `head` and `handler`, then `build`s a `ServeMux`. `ServeMux` is a
  WSGI application with one router per HTTP method. Unmatched requests go to
  `not_found`, which answers `404 page not found`. Another handler can be
  given as `not_found_handler`.

## Installation

```
pip install apiruntime
```

To run the tests:

```
pip install "apiruntime[test]"
pytest
```

## Examples

```python
from apiruntime.headers import content_type

content_type({"Content-Type": "text/html; charset=utf-8"})  # ("text/html", "utf-8")
```

```python
import io
from apiruntime.csvcodec import csv_consumer
from apiruntime.csvio import CSVOptions

records = []
csv_consumer(CSVOptions(skip_lines=1)).consume(io.StringIO("name,age\nJohn,19\n"), records)
# records == [["John", "19"]]
```

```python
from apiruntime.bytesize import ByteSize, human_size

human_size(1024)                # "1.024kB"
ByteSize.unmarshal_flag("1MB")  # ByteSize(1000000)
```

```python
from apiruntime.denco.router import Record, Router

router = Router()
router.build([Record("/user/:id", "show-user"), Record("/files/*path", "serve-file")])
data, params, found = router.lookup("/user/777")
# data == "show-user", params.get("id") == "777", found is True
```

```python
from apiruntime.denco.server import Mux

def hello(environ, start_response, params):
    start_response("200 OK", [("Content-Type", "text/plain")])
    return [f"hello {params.get('name')}".encode()]

mux = Mux()
app = mux.build([mux.get("/hello/:name", hello)])  # a WSGI application
```

## What it does not do

The package has no API server layer. It does not load API specifications.
It does not negotiate content, validate or bind requests, or run
authentication middleware. The authenticator and authorizer types are only
protocols for such code to implement. The package has no YAML, XML or text
codecs and no command-line tool.