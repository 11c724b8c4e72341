"""
Tests for the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from lua_index.core.indexer import get_source_index
from lua_index.core.paths import path_to_uri
from lua_index.main import app

from conftest import write_lua


@pytest.fixture
def client(index):
    """Test client bound to the per-test index."""
    app.dependency_overrides[get_source_index] = lambda: index
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def main_uri(workspace):
    return path_to_uri(str(workspace / "main.lua"))


class TestRootAndHealth:
    """Test informational endpoints."""

    def test_root(self, client):
        """Root endpoint describes the service."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Lua Code Index"

    def test_health(self, client):
        """Health endpoint reports healthy."""
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_reports_index(self, client, index, workspace):
        """Readiness includes index counters."""
        write_lua(workspace, "Scripts/g.lua", "G = 1\n")
        index.index_dependency(None, str(workspace / "Scripts" / "g.lua"), is_global=True)

        data = client.get("/health/ready").json()

        assert data["status"] == "ready"
        assert data["indexed_files"] == 1
        assert data["global_files"] == 1


class TestDocumentLifecycle:
    """Test document notifications and navigation."""

    def test_open_then_definition(self, client, main_uri):
        """An opened buffer is indexed and queryable."""
        response = client.post("/documents/open", json={"uri": main_uri, "text": "local a = 1\nprint(a)\n"})
        assert response.status_code == 200
        assert response.json()["open"] is True

        response = client.post("/definition", json={"uri": main_uri, "line": 1, "character": 6})

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["label"] == "a"
        assert data[0]["range"]["start"] == {"line": 0, "character": 6}

    def test_change_marks_dirty_and_query_resyncs(self, client, main_uri):
        """Changes are indexed lazily on the next query."""
        client.post("/documents/open", json={"uri": main_uri, "text": "print(b)\n"})

        response = client.post("/documents/change", json={"uri": main_uri, "text": "local b = 2\nprint(b)\n"})
        assert response.json()["dirty"] is True

        data = client.post("/definition", json={"uri": main_uri, "line": 1, "character": 6}).json()
        assert [loc["range"]["start"]["line"] for loc in data] == [0]

    def test_save_reindexes(self, client, main_uri):
        """Saving with new text re-indexes immediately."""
        client.post("/documents/open", json={"uri": main_uri, "text": "function one() end\n"})

        response = client.post(
            "/documents/save",
            json={"uri": main_uri, "text": "function one() end\nfunction two() end\n"}
        )

        assert response.status_code == 200
        assert response.json()["dirty"] is False
        assert response.json()["outline_count"] == 2

    def test_close_and_reclose(self, client, main_uri):
        """Closing drops the buffer; closing again is a 404."""
        client.post("/documents/open", json={"uri": main_uri, "text": "x = 1\n"})

        response = client.post("/documents/close", json={"uri": main_uri})
        assert response.status_code == 200
        assert response.json()["open"] is False

        assert client.post("/documents/close", json={"uri": main_uri}).status_code == 404

    def test_outline(self, client, main_uri):
        """Outline lists named functions in order."""
        client.post("/documents/open", json={
            "uri": main_uri,
            "text": "function M.start() end\nlocal function helper() end\n",
        })

        data = client.post("/outline", json={"uri": main_uri}).json()

        assert [(s["label"], s["kind"]) for s in data] == [("start", "method"), ("helper", "function")]

    def test_save_of_unreadable_uri(self, client, workspace):
        """Saving a path that cannot be read still indexes the sent text."""
        (workspace / "d.lua").mkdir()
        uri = path_to_uri(str(workspace / "d.lua"))

        response = client.post("/documents/save", json={"uri": uri, "text": "local z = 1\n"})

        assert response.status_code == 200
        assert response.json()["dirty"] is False
        data = client.post("/definition", json={"uri": uri, "line": 0, "character": 6}).json()
        assert [loc["label"] for loc in data] == ["z"]

    def test_definition_miss_is_empty(self, client, main_uri):
        """Unknown files and misses return an empty list."""
        response = client.post("/definition", json={"uri": main_uri, "line": 0, "character": 0})

        assert response.status_code == 200
        assert response.json() == []

    def test_invalid_position_rejected(self, client, main_uri):
        """Negative positions fail validation."""
        response = client.post("/definition", json={"uri": main_uri, "line": -1, "character": 0})

        assert response.status_code == 422


class TestFilesAndConfiguration:
    """Test file listing and configuration endpoints."""

    def test_file_listing(self, client, index, workspace, main_uri):
        """Indexed files, dependencies and globals are listed."""
        dep = write_lua(workspace, "dep.lua", "D = 1\n")
        client.post("/documents/open", json={"uri": main_uri, "text": "require('dep')\n"})

        files = client.get("/files/").json()
        by_uri = {f["uri"]: f for f in files}

        assert set(by_uri) == {main_uri, path_to_uri(str(dep))}
        assert by_uri[main_uri]["dependencies"] == [path_to_uri(str(dep))]
        assert by_uri[path_to_uri(str(dep))]["assignment_count"] == 1
        assert client.get("/files/globals").json() == []

    def test_get_configuration(self, client):
        """Current snapshot is returned."""
        data = client.get("/configuration").json()

        assert data["lua_version"] == "5.1"
        assert "require" in data["include_keywords"]

    def test_replace_configuration(self, client, index, main_uri):
        """A new snapshot is applied wholesale."""
        client.post("/documents/open", json={"uri": main_uri, "text": "local x <const> = 1\nprint(x)\n"})
        assert client.post("/definition", json={"uri": main_uri, "line": 1, "character": 6}).json() == []

        response = client.put("/configuration", json={"lua_version": "5.4", "search_paths": ["libs"]})

        assert response.status_code == 200
        assert response.json()["search_paths"] == ["libs"]
        assert index.config.lua_version.value == "5.4"
        data = client.post("/definition", json={"uri": main_uri, "line": 1, "character": 6}).json()
        assert [loc["label"] for loc in data] == ["x"]

    def test_invalid_configuration_rejected(self, client):
        """Unknown Lua versions fail validation."""
        response = client.put("/configuration", json={"lua_version": "6.0"})

        assert response.status_code == 422
