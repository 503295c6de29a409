# tests/test_api.py

"""
API Endpoint Tests - /health and offline /parse
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from glassdoor_reviews.api import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestHealthEndpoint:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ok"


class TestParseEndpoint:

    def test_parse_inline_html(self, client, review_page):
        response = client.post("/parse", json={"company": "Enbridge", "html": review_page})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["meta"]["reviews_found"] == 2
        first = data["reviews"][0]
        assert first["company"] == "Enbridge"
        assert first["date"] == "2025-11-28"
        assert first["job_title"] == "Current Employee - Engineer"

    def test_parse_local_file(self, client, review_page, tmp_path):
        saved = tmp_path / "debug_no_reviews_Enbridge_page1.html"
        saved.write_text(review_page, encoding="utf-8")
        response = client.post("/parse", json={"company": "Enbridge", "local_html": str(saved)})
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["reviews"]) == 2

    def test_parse_missing_file(self, client, tmp_path):
        response = client.post("/parse", json={"company": "Enbridge", "local_html": str(tmp_path / "nope.html")})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_parse_directory_rejected(self, client, tmp_path):
        response = client.post("/parse", json={"company": "Enbridge", "local_html": str(tmp_path)})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "not a readable file" in response.json()["detail"]

    def test_parse_requires_input(self, client):
        response = client.post("/parse", json={"company": "Enbridge"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_parse_no_reviews(self, client):
        response = client.post("/parse", json={"company": "Enbridge", "html": "<html></html>"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["reviews"] == []
