"""Tests for the HTTP job-control routes."""

import time
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from listing_scraper.crawl_controller import CrawlController

from listing_api.core.config import settings
from listing_api.core.controller import set_controller
from listing_api.main import app


@pytest.fixture
def controller(movie_server):
    controller = CrawlController(transport=movie_server.transport)
    set_controller(controller)
    yield controller
    set_controller(None)


@pytest.fixture
def client(controller):
    with TestClient(app) as client:
        yield client


def _wait_until_finished(client: TestClient) -> dict:
    for _ in range(500):
        status = client.get("/api/scraper/status").json()
        if not status["is_running"]:
            return status
        time.sleep(0.01)
    raise AssertionError("crawl did not finish")


def test_health(client) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_status_when_idle(client) -> None:
    body = client.get("/api/scraper/status").json()
    assert body["state"] == "idle"
    assert body["results"] == []


def test_scrape_then_download(client, movie_server) -> None:
    response = client.post(
        "/api/scraper/scrape",
        json={"baseUrl": movie_server.url("/Data/movies/"), "delay": 0},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Scraping started"}

    status = _wait_until_finished(client)
    assert status["state"] == "complete"
    assert status["results_count"] == 4

    download = client.get("/api/scraper/download")
    assert download.status_code == 200
    assert download.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert 'filename="movies_' in download.headers["content-disposition"]
    assert load_workbook(BytesIO(download.content)).sheetnames == ["Movies", "Failures"]


def test_scrape_rejects_invalid_url(client) -> None:
    response = client.post("/api/scraper/scrape", json={"baseUrl": "not-a-url", "delay": 0})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid URL format"


def test_scrape_rejects_second_job(client, controller) -> None:
    controller.tracker.reset("http://listing.test/Data/movies/", "movies", 0)

    response = client.post("/api/scraper/scrape", json={"baseUrl": "http://listing.test/x/", "delay": 0})
    assert response.status_code == 400
    assert response.json()["detail"] == "Scraping already in progress"


def test_stop_and_empty_download(client) -> None:
    assert client.post("/api/scraper/stop").json() == {"message": "Scraping stopped"}

    response = client.get("/api/scraper/download")
    assert response.status_code == 400
    assert response.json()["detail"] == "No data to download"


def test_admin_token_required_when_configured(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_token", "secret")

    assert client.get("/api/scraper/status").status_code == 401
    assert client.get("/api/scraper/status", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert client.get("/api/scraper/status", headers={"Authorization": "Bearer secret"}).status_code == 200
    assert client.get("/api/scraper/status", params={"token": "secret"}).status_code == 200
    assert client.get("/api/health").status_code == 200
