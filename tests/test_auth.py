from __future__ import annotations

import pytest

PROTECTED = [
    ("post", "/import-students"),
    ("post", "/add-student"),
    ("get", "/check-card"),
    ("post", "/mark-issued"),
    ("get", "/export-issued"),
]


@pytest.mark.parametrize("method,path", PROTECTED)
def test_missing_key_is_forbidden(client, fake_db, method, path):
    resp = client.request(method.upper(), path)

    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden"}
    assert fake_db.calls == []


@pytest.mark.parametrize("method,path", PROTECTED)
def test_wrong_key_is_forbidden(client, fake_db, method, path):
    resp = client.request(method.upper(), path, headers={"x-api-key": "nope"})

    assert resp.status_code == 403
    assert fake_db.calls == []


def test_bad_key_wins_over_missing_fields(client, fake_db):
    resp = client.post("/add-student", json={"htno": "H1"}, headers={"x-api-key": "nope"})

    assert resp.status_code == 403
    assert fake_db.calls == []


def test_bad_key_wins_over_unparseable_body(client, fake_db):
    resp = client.post(
        "/mark-issued",
        content=b"{not json",
        headers={"x-api-key": "nope", "content-type": "application/json"},
    )

    assert resp.status_code == 403
    assert fake_db.calls == []


def test_bad_key_wins_over_missing_upload(client, fake_db):
    resp = client.post("/import-students", headers={"x-api-key": "nope"})

    assert resp.status_code == 403


def test_default_secret_applies_when_unset(client, fake_db, monkeypatch):
    monkeypatch.delenv("API_KEY")

    resp = client.get("/check-card", params={"uid": "X"}, headers={"x-api-key": "changeme"})

    assert resp.status_code == 404


def test_health_is_open(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
