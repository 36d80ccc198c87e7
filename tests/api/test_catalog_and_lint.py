"""Tests for catalog and lint API routers."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from skillshelf.api import create_app
from skillshelf.core.context import SharedContext


@pytest.fixture
def client(sample_corpus: Path, test_context: SharedContext):
    app = create_app(test_context)
    with TestClient(app) as client:
        yield client


class TestCatalog:
    def test_default_is_markdown(self, client):
        response = client.get("/catalog")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/markdown")
        assert "**api-error-handling**" in response.text

    def test_json_format(self, client):
        response = client.get("/catalog", params={"format": "json"})

        assert response.status_code == 200
        assert [e["id"] for e in response.json()] == [
            "api-error-handling",
            "mysql-best-practices",
        ]

    def test_unknown_format_rejected(self, client):
        response = client.get("/catalog", params={"format": "html"})

        assert response.status_code == 422


class TestLint:
    def test_clean_corpus(self, client):
        response = client.get("/lint")

        assert response.status_code == 200
        report = response.json()
        assert report["findings"] == []
        assert report["error_count"] == 0
        assert report["skills_checked"] == 2

    def test_reports_findings(self, client, make_skill):
        make_skill("no-desc", "---\nname: no-desc\n---\n")

        report = client.get("/lint").json()

        assert report["error_count"] == 1
        assert report["findings"][0]["path"] == "skills/no-desc/SKILL.md"

    def test_single_skill(self, client):
        response = client.get("/lint/mysql-best-practices")

        assert response.status_code == 200
        assert response.json()["skills_checked"] == 1

    def test_single_skill_not_found(self, client):
        assert client.get("/lint/nope").status_code == 404
