"""
Tests for the HTTP API.

Exercises the comparison endpoint and the session endpoints through
FastAPI's TestClient, with the session store redirected to a temp file.
"""

import pytest
from pathlib import Path

from fastapi.testclient import TestClient

import index
from code_diff_highlighter.storage import DebouncedSaver, SessionStore


@pytest.fixture
def autosaver(session_store: SessionStore) -> DebouncedSaver:
    """Saver with a long delay so only flushes reach the disk."""
    saver = DebouncedSaver(session_store, delay=30)
    yield saver
    saver.cancel()


@pytest.fixture
def client(monkeypatch, session_store: SessionStore, autosaver: DebouncedSaver) -> TestClient:
    monkeypatch.setattr(index, "session_store", session_store)
    monkeypatch.setattr(index, "autosaver", autosaver)
    return TestClient(index.app)


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert "Code Diff Highlighter" in response.text


class TestCompareEndpoint:
    """Tests for POST /api/compare."""

    def test_compare(self, client: TestClient, old_code: str, new_code: str):
        response = client.post("/api/compare", json={"old_text": old_code, "new_text": new_code})

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] == {"added": 1, "changed": 1, "removed": 1}
        assert [line["category"] for line in data["lines"]] == [
            "unchanged", "changed", "unchanged", "added", "unchanged",
        ]
        assert '<div class="added">' in data["html"]
        assert data["stats_html"].startswith("<strong>Diff Stats:</strong>")

    def test_html_escaped(self, client: TestClient):
        response = client.post("/api/compare", json={"old_text": "a", "new_text": "a\n<b>&"})
        assert '<div class="added">&lt;b&gt;&amp;</div>' in response.json()["html"]

    def test_threshold(self, client: TestClient):
        response = client.post(
            "/api/compare",
            json={"old_text": "foo bar", "new_text": "foo baz", "threshold": 0.9},
        )
        assert response.json()["stats"] == {"added": 1, "changed": 0, "removed": 1}

    def test_consume_on_match(self, client: TestClient):
        response = client.post(
            "/api/compare",
            json={
                "old_text": "total = a + b",
                "new_text": "total = a + c\ntotal = a + d",
                "consume_on_match": True,
            },
        )
        assert response.json()["stats"] == {"added": 1, "changed": 1, "removed": 1}

    def test_missing_input(self, client: TestClient):
        response = client.post("/api/compare", json={"old_text": "  ", "new_text": "x"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter both old and new code."

    def test_invalid_threshold(self, client: TestClient):
        response = client.post(
            "/api/compare",
            json={"old_text": "a", "new_text": "b", "threshold": 2},
        )
        assert response.status_code == 422

    def test_too_large(self, client: TestClient):
        lines = "\n".join(f"line {i}" for i in range(2001))
        response = client.post("/api/compare", json={"old_text": lines, "new_text": lines})
        assert response.status_code == 413

    def test_save(self, client: TestClient, session_store: SessionStore):
        client.post(
            "/api/compare",
            json={"old_text": " old \n", "new_text": "new", "save": True},
        )
        assert session_store.get_pair() == ("old", "new")


class TestSessionEndpoints:
    """Tests for /api/session."""

    def test_get_empty(self, client: TestClient):
        assert client.get("/api/session").json() == {"old_text": None, "new_text": None}

    def test_put_then_get(self, client: TestClient):
        response = client.put("/api/session", json={"old_text": "a", "new_text": "b"})

        assert response.status_code == 202
        assert client.get("/api/session").json() == {"old_text": "a", "new_text": "b"}

    def test_put_is_debounced(
        self, client: TestClient, session_store: SessionStore, autosaver: DebouncedSaver
    ):
        client.put("/api/session", json={"old_text": "a1", "new_text": "b1"})
        client.put("/api/session", json={"old_text": "a2", "new_text": "b2"})

        assert autosaver.pending
        assert session_store.get_pair() == (None, None)

        autosaver.flush()
        assert session_store.get_pair() == ("a2", "b2")

    def test_put_trims_texts(self, client: TestClient):
        client.put("/api/session", json={"old_text": "  old\r\nline \n", "new_text": "\tnew\n"})
        assert client.get("/api/session").json() == {"old_text": "old\nline", "new_text": "new"}

    def test_put_keeps_missing_field(self, client: TestClient, session_store: SessionStore):
        session_store.save_pair("kept old", "stale new")

        client.put("/api/session", json={"new_text": "fresh new"})

        assert client.get("/api/session").json() == {
            "old_text": "kept old",
            "new_text": "fresh new",
        }

    def test_put_missing_field_stays_null(self, client: TestClient):
        client.put("/api/session", json={"old_text": "only old"})
        assert client.get("/api/session").json() == {"old_text": "only old", "new_text": None}

    def test_delete(self, client: TestClient, session_store: SessionStore):
        session_store.save_pair("a", "b")

        response = client.delete("/api/session")

        assert response.status_code == 200
        assert session_store.get_pair() == (None, None)

    def test_delete_drops_pending_autosave(
        self, client: TestClient, session_store: SessionStore, autosaver: DebouncedSaver
    ):
        client.put("/api/session", json={"old_text": "a", "new_text": "b"})
        client.delete("/api/session")

        assert not autosaver.pending
        assert client.get("/api/session").json() == {"old_text": None, "new_text": None}

    def test_explicit_save_supersedes_autosave(
        self, client: TestClient, session_store: SessionStore, autosaver: DebouncedSaver
    ):
        client.put("/api/session", json={"old_text": "draft old", "new_text": "draft new"})
        client.post("/api/compare", json={"old_text": "a", "new_text": "b", "save": True})

        assert not autosaver.pending
        assert session_store.get_pair() == ("a", "b")


class TestCompareSessionEndpoint:
    """Tests for GET /api/session/compare."""

    def test_compares_saved_texts(self, client: TestClient, session_store: SessionStore):
        session_store.save_pair("foo bar", "foo baz")

        response = client.get("/api/session/compare")

        assert response.status_code == 200
        assert response.json()["stats"] == {"added": 0, "changed": 1, "removed": 1}

    def test_includes_pending_autosave(self, client: TestClient):
        client.put("/api/session", json={"old_text": "x = 1", "new_text": "x = 1\ny = 2"})

        response = client.get("/api/session/compare")

        assert response.json()["stats"] == {"added": 1, "changed": 0, "removed": 0}

    def test_nothing_saved(self, client: TestClient):
        assert client.get("/api/session/compare").status_code == 404

    def test_blank_new_text(self, client: TestClient, session_store: SessionStore):
        session_store.save_pair("x = 1", "  ")

        response = client.get("/api/session/compare")

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter both old and new code."
