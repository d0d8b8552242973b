import asyncio
import pathlib
import sys

import pytest
from starlette.requests import Request

base_dir = pathlib.Path(__file__).resolve().parents[1]
sys.path.append(str(base_dir))

from main import create_app
from models import Article
from schemas import ArticleSchema, BodyReadError, DecodeError, decode_article, read_body


def _scope(method: str, path: str) -> dict:
    return {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [(b"content-type", b"application/json")],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }


async def _disconnect():
    return {"type": "http.disconnect"}


def _call_disconnected(app, method: str, path: str) -> dict:
    messages = []

    async def send(message):
        messages.append(message)

    asyncio.run(app(_scope(method, path), _disconnect, send))
    return messages[0]


def test_decode_article():
    article = decode_article(b'{"id": "7", "title": "T", "desc": "D", "content": "C"}')
    assert article == Article(id="7", title="T", description="D", content="C")


@pytest.mark.parametrize(
    "body",
    [b"", b"not json", b'"not json"', b"[]", b'{"id": 7}'],
)
def test_decode_article_errors(body):
    with pytest.raises(DecodeError):
        decode_article(body)


def test_schema_wire_keys():
    schema = ArticleSchema.from_article(Article(id="1", description="d"))
    assert schema.model_dump(by_alias=True) == {
        "id": "1",
        "title": "",
        "desc": "d",
        "content": "",
    }


def test_read_body_disconnect():
    request = Request(_scope("POST", "/articles"), _disconnect)
    with pytest.raises(BodyReadError):
        asyncio.run(read_body(request))


def test_create_body_read_failure():
    app = create_app()
    start = _call_disconnected(app, "POST", "/articles")
    assert start["status"] == 400
    assert len(app.state.store) == 2


def test_update_body_read_failure():
    app = create_app()
    start = _call_disconnected(app, "PUT", "/articles/1")
    assert start["status"] == 400
    assert app.state.store.get("1").title == "Golang Tutorial"


def test_decode_null_is_empty_article():
    assert decode_article(b"null") == Article()


def test_decode_ignores_python_field_name():
    article = decode_article(b'{"id": "9", "description": "X"}')
    assert article == Article(id="9")


def test_decode_matches_keys_case_insensitively():
    article = decode_article(b'{"ID": "4", "Title": "T", "DESC": "D", "Content": "C"}')
    assert article == Article(id="4", title="T", description="D", content="C")


def test_decode_exact_key_wins_over_folded():
    assert decode_article(b'{"Title": "folded", "title": "exact"}').title == "exact"
    assert decode_article(b'{"title": "exact", "Title": "folded"}').title == "exact"
