"""Tests for the dashboard API."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from insertive.app import Insertive
from insertive.storage.memory import MemorySnippetStore
from insertive.web.server import create_app


@pytest.fixture
def store() -> MemorySnippetStore:
    return MemorySnippetStore()


@pytest.fixture
def insertive(store: MemorySnippetStore) -> Insertive:
    return Insertive(store=store, notifier=None)


@pytest.fixture
def client(insertive: Insertive) -> Iterator[TestClient]:
    with TestClient(create_app(insertive)) as c:
        yield c


def _keys(client: TestClient) -> list[str]:
    return [s["key"] for s in client.get("/api/snippets").json()["snippets"]]


class TestStatus:
    def test_status(self, client: TestClient) -> None:
        data = client.get("/api/status").json()
        assert data["status"] == "running"
        assert data["snippet_count"] == 2

    def test_lifespan_stops_owned_app(self, insertive: Insertive) -> None:
        with TestClient(create_app(insertive)):
            assert insertive.running
        assert not insertive.running


class TestSnippetRoutes:
    def test_list(self, client: TestClient) -> None:
        data = client.get("/api/snippets").json()
        assert data["snippets"][1] == {
            "key": "greet",
            "text": "Hello {1} (from Insertive)",
            "icon": "hand",
            "group": "",
        }
        assert data["groups"] == []

    def test_add(self, client: TestClient, store: MemorySnippetStore) -> None:
        resp = client.post(
            "/api/snippets", json={"key": "todo", "text": "- [ ] {1}", "group": "Lists"}
        )
        assert resp.status_code == 201
        assert resp.json()["snippet"]["icon"] == "stamp"
        assert _keys(client) == ["hello", "greet", "todo"]
        assert store.state is not None
        assert store.state["groups"]["todo"] == "Lists"

    def test_add_duplicate_conflicts(self, client: TestClient) -> None:
        resp = client.post("/api/snippets", json={"key": "hello", "text": "other"})
        assert resp.status_code == 409
        assert client.get("/api/snippets/hello").json()["text"] == "_Hello World_"

    def test_add_with_overwrite(self, client: TestClient) -> None:
        resp = client.post(
            "/api/snippets", json={"key": "hello", "text": "other", "overwrite": True}
        )
        assert resp.status_code == 201
        assert client.get("/api/snippets/hello").json()["text"] == "other"
        assert _keys(client) == ["hello", "greet"]

    def test_add_invalid_key(self, client: TestClient) -> None:
        resp = client.post("/api/snippets", json={"key": "has space", "text": "x"})
        assert resp.status_code == 422
        assert resp.json()["reason"] == "contains space"

    def test_rename_keeps_position(self, client: TestClient) -> None:
        resp = client.put("/api/snippets/hello", json={"key": "hi", "icon": "star"})
        assert resp.status_code == 200
        assert _keys(client) == ["hi", "greet"]
        assert client.get("/api/snippets/hi").json()["icon"] == "star"

    def test_rename_collision(self, client: TestClient) -> None:
        resp = client.put("/api/snippets/hello", json={"key": "greet"})
        assert resp.status_code == 409

    def test_delete(self, client: TestClient) -> None:
        assert client.delete("/api/snippets/hello").status_code == 200
        assert _keys(client) == ["greet"]
        assert client.delete("/api/snippets/hello").status_code == 404

    def test_get_missing(self, client: TestClient) -> None:
        assert client.get("/api/snippets/nope").status_code == 404

    def test_reorder(self, client: TestClient) -> None:
        resp = client.post("/api/snippets/reorder", json={"from_index": 0, "to_index": 1})
        assert resp.json()["order"] == ["greet", "hello"]

        resp = client.post("/api/snippets/reorder", json={"from_index": 0, "to_index": 5})
        assert resp.status_code == 400

    def test_render(self, client: TestClient) -> None:
        resp = client.post("/api/snippets/greet/render", json={"selection": "World"})
        assert resp.json()["text"] == "Hello World (from Insertive)"

    def test_render_unknown(self, client: TestClient) -> None:
        resp = client.post("/api/snippets/nope/render", json={"selection": "x"})
        assert resp.status_code == 404

    def test_search(self, client: TestClient) -> None:
        data = client.get("/api/search", params={"q": "GR"}).json()
        assert data["results"] == [{"key": "greet", "preview": "Hello {1} (from Insertive)"}]

    def test_snippet_named_search_is_reachable(self, client: TestClient) -> None:
        client.post("/api/snippets", json={"key": "search", "text": "S"})

        resp = client.get("/api/snippets/search")
        assert resp.status_code == 200
        assert resp.json()["text"] == "S"

    def test_menu(self, client: TestClient) -> None:
        client.post("/api/snippets", json={"key": "b", "text": "B", "group": "Z"})
        menu = client.get("/api/menu").json()

        assert [c["kind"] for c in menu["children"]] == [
            "snippet",
            "snippet",
            "folder",
            "separator",
            "action",
        ]

    def test_persistence_failure_keeps_change(
        self, client: TestClient, store: MemorySnippetStore
    ) -> None:
        store.fail = True
        resp = client.post("/api/snippets", json={"key": "new", "text": "N"})

        assert resp.status_code == 503
        assert "new" in _keys(client)
