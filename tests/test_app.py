from http import HTTPStatus
from wsgiref.util import setup_testing_defaults

import pytest

from items_renderer.app import MethodNotAllowed, RouteNotFound, Router, compose


class Recorder:
    def __init__(self, body):
        self.body = body
        self.seen = []

    def handle(self, params):
        self.seen.append(dict(params))
        return self.body


class Failing:
    def handle(self, params):
        raise RuntimeError("boom")


@pytest.fixture
def handlers():
    return Recorder("catalogue"), Recorder("category"), Recorder("page")


@pytest.fixture
def router(handlers):
    return compose(*handlers)


def call(app, method, path):
    environ = {"REQUEST_METHOD": method, "PATH_INFO": path}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = int(status.split()[0])
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


def test_root_goes_to_catalogue(router, handlers):
    handler, params = router.match("GET", "/")
    assert handler is handlers[0]
    assert params == {}


def test_single_segment_goes_to_category(router, handlers):
    handler, params = router.match("GET", "/fruits")
    assert handler is handlers[1]
    assert params == {"category": "fruits"}


def test_product_path_goes_to_page(router, handlers):
    handler, params = router.match("GET", "/product/abc")
    assert handler is handlers[2]
    assert params == {"id": "abc"}


def test_bare_product_is_a_category(router, handlers):
    handler, params = router.match("GET", "/product")
    assert handler is handlers[1]
    assert params == {"category": "product"}


def test_head_matches_get(router, handlers):
    handler, _ = router.match("HEAD", "/")
    assert handler is handlers[0]


def test_unknown_path_not_found(router):
    with pytest.raises(RouteNotFound):
        router.match("GET", "/a/b/c")


def test_wrong_method_not_allowed(router):
    with pytest.raises(MethodNotAllowed) as info:
        router.match("POST", "/")
    assert set(info.value.allowed) == {"GET", "HEAD"}


def test_duplicate_pattern_rejected(router, handlers):
    with pytest.raises(ValueError):
        router.handle("GET /{category}", handlers[0])


def test_pattern_without_path_rejected():
    with pytest.raises(ValueError):
        Router().handle("GET product", Recorder("x"))


def test_literal_beats_wildcard():
    router = Router()
    wild, literal = Recorder("wild"), Recorder("literal")
    router.handle("GET /{name}", wild)
    router.handle("GET /about", literal)
    assert router.match("GET", "/about")[0] is literal
    assert router.match("GET", "/other")[0] is wild


def test_rest_wildcard_collects_tail():
    router = Router()
    files = Recorder("files")
    router.handle("GET /files/{path...}", files)
    assert router.match("GET", "/files/a/b")[1] == {"path": "a/b"}


def test_wsgi_ok_response(router, handlers):
    status, headers, body = call(router, "GET", "/product/abc")
    assert status == HTTPStatus.OK
    assert body == b"page"
    assert headers["Content-Type"].startswith("text/html")
    assert handlers[2].seen == [{"id": "abc"}]


def test_wsgi_decodes_utf8_path(router, handlers):
    name = "фрукты"
    status, _, body = call(router, "GET", "/" + name.encode("utf-8").decode("latin-1"))
    assert status == HTTPStatus.OK
    assert body == b"category"
    assert handlers[1].seen == [{"category": name}]


def test_wsgi_not_found(router):
    status, _, _ = call(router, "GET", "/a/b/c")
    assert status == HTTPStatus.NOT_FOUND


def test_wsgi_method_not_allowed(router):
    status, headers, _ = call(router, "DELETE", "/")
    assert status == HTTPStatus.METHOD_NOT_ALLOWED
    assert headers["Allow"] == "GET, HEAD"


def test_wsgi_head_has_no_body(router):
    status, headers, body = call(router, "HEAD", "/")
    assert status == HTTPStatus.OK
    assert body == b""
    assert headers["Content-Length"] == str(len(b"catalogue"))


def test_wsgi_handler_failure_is_server_error():
    app = compose(Failing(), Recorder("category"), Recorder("page"))
    status, _, _ = call(app, "GET", "/")
    assert status == HTTPStatus.INTERNAL_SERVER_ERROR