"""Tests for the Flask inspection API."""

from pptoken import TokenKind


def test_kinds_lists_named_kinds(client):
    resp = client.get("/api/kinds")
    assert resp.status_code == 200
    kinds = {k["name"]: k for k in resp.get_json()["kinds"]}
    assert kinds["T_IDENTIFIER"]["id"] == TokenKind.IDENTIFIER
    assert kinds["T_IDENTIFIER"]["category"] == "IDENTIFIER"
    assert kinds["T_UNKNOWN"]["category"] is None
    assert "T_AND_ALT" not in kinds


def test_token_from_id_and_value(client):
    resp = client.post("/api/token", json={"id": 5, "value": 42})
    assert resp.status_code == 200
    assert resp.get_json() == {
        "kind": 5,
        "name": "T_UNKNOWN_5",
        "display": "42",
        "debug": "Token(T_UNKNOWN_5, '42', ?:0:0)",
    }


def test_token_defaults(client):
    resp = client.post("/api/token", json={})
    assert resp.get_json()["debug"] == "Token(T_UNKNOWN, '', ?:0:0)"


def test_token_null_value_is_stringified(client):
    resp = client.post("/api/token", json={"id": 0, "value": None})
    assert resp.get_json()["display"] == "None"


def test_token_bad_id(client):
    resp = client.post("/api/token", json={"id": "five", "value": "x"})
    assert resp.status_code == 400
    assert "id must be an integer" in resp.get_json()["error"]


def test_tokens_wrap_and_retag(client):
    body = {
        "tokens": [
            {"type": "T_IDENTIFIER", "value": "size_t", "file": "a.c", "line": 1, "column": 1},
            {"type": "T_IDENTIFIER", "value": "n", "file": "a.c", "line": 1, "column": 8},
            {"type": "T_SEMICOLON", "value": ";", "file": "a.c", "line": 1, "column": 9},
        ],
        "retag": {"T_IDENTIFIER": "T_TYPENAME"},
    }
    resp = client.post("/api/tokens", json=body)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["stats"] == {"total": 3, "retagged": 2,
                             "by_kind": {"TYPENAME": 2, "SEMICOLON": 1}}
    first = data["tokens"][0]
    assert first["kind"] == TokenKind.TYPENAME
    assert first["display"] == "size_t"
    assert first["debug"] == "Token(T_TYPENAME, 'size_t', a.c:1:1)"
    assert (first["file"], first["line"], first["column"]) == ("a.c", 1, 1)


def test_tokens_without_retag(client):
    resp = client.post("/api/tokens", json={"tokens": [{"kind": 0, "value": "x"}]})
    data = resp.get_json()
    assert data["stats"]["retagged"] == 0
    assert data["tokens"][0]["debug"] == "Token(T_UNKNOWN, 'x', ?:0:0)"


def test_tokens_missing(client):
    resp = client.post("/api/tokens", json={})
    assert resp.status_code == 400


def test_tokens_bad_record(client):
    resp = client.post("/api/tokens", json={"tokens": [{"type": "T_NOPE", "value": "x"}]})
    assert resp.status_code == 400
    assert "T_NOPE" in resp.get_json()["error"]


def test_tokens_bad_retag(client):
    resp = client.post("/api/tokens", json={"tokens": [], "retag": {"T_IDENTIFIER": 7}})
    assert resp.status_code == 400
