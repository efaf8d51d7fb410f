import pytest

from apiruntime.denco.router import Params, RouterError
from apiruntime.denco.server import Handler, Mux, ServeMux, not_found


def handler_func(environ, start_response, params):
    start_response("200 OK", [("Content-Type", "text/plain")])
    text = f"method: {environ['REQUEST_METHOD']}, path: {environ['PATH_INFO']}, params: {params}"
    return [text.encode()]


def call(app, method, path):
    captured = {}

    def start_response(status, headers):
        captured["status"] = int(status.split(" ", 1)[0])
        captured["headers"] = headers

    body = b"".join(app({"REQUEST_METHOD": method, "PATH_INFO": path}, start_response))
    return captured.get("status"), body.decode()


@pytest.fixture
def app():
    mux = Mux()
    return mux.build([
        mux.get("/", handler_func),
        mux.get("/user/:name", handler_func),
        mux.post("/user/:name", handler_func),
        mux.head("/user/:name", handler_func),
        mux.put("/user/:name", handler_func),
        mux.handler("GET", "/user/handler", handler_func),
        mux.handler("POST", "/user/handler", handler_func),
        mux.handler("PUT", "/user/inference", handler_func),
    ])


@pytest.mark.parametrize(
    "status, method, path, expected",
    [
        (200, "GET", "/", "method: GET, path: /, params: []"),
        (200, "GET", "/user/alice", "method: GET, path: /user/alice, params: [{name alice}]"),
        (200, "POST", "/user/bob", "method: POST, path: /user/bob, params: [{name bob}]"),
        (200, "HEAD", "/user/alice", ""),
        (200, "PUT", "/user/bob", "method: PUT, path: /user/bob, params: [{name bob}]"),
        (404, "POST", "/", "404 page not found\n"),
        (404, "GET", "/unknown", "404 page not found\n"),
        (404, "POST", "/user/alice/1", "404 page not found\n"),
        (200, "GET", "/user/handler", "method: GET, path: /user/handler, params: []"),
        (200, "POST", "/user/handler", "method: POST, path: /user/handler, params: []"),
        (200, "PUT", "/user/inference", "method: PUT, path: /user/inference, params: []"),
    ],
)
def test_mux(app, status, method, path, expected):
    assert call(app, method, path) == (status, expected)


def test_custom_not_found():
    app = Mux().build([])

    def unavailable(environ, start_response, params):
        start_response("503 Service Unavailable", [])
        text = f"method: {environ['REQUEST_METHOD']}, path: {environ['PATH_INFO']}, params: {params}"
        return [text.encode()]

    app.not_found_handler = unavailable
    assert call(app, "GET", "/") == (503, "method: GET, path: /, params: []")


def test_default_not_found_response():
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = not_found({}, start_response, Params())
    assert body == [b"404 page not found\n"]
    assert captured["status"] == "404 Not Found"
    assert captured["headers"]["Content-Type"] == "text/plain; charset=utf-8"


def test_handler_shorthands():
    mux = Mux()
    assert mux.get("/x", handler_func) == Handler("GET", "/x", handler_func)
    assert mux.head("/y", handler_func).method == "HEAD"


def test_build_propagates_router_errors():
    mux = Mux()
    with pytest.raises(RouterError):
        mux.build([mux.get("/:id/:id", handler_func)])


def test_resolve_unknown_method_returns_not_found():
    app = ServeMux()
    func, params = app.resolve("DELETE", "/anything")
    assert func is not_found
    assert params == []