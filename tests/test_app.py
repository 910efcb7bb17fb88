"""Tests for application-wide error handling."""

from dataclasses import dataclass

from fastapi.testclient import TestClient

from seednote_api.api.app import create_app
from seednote_api.domain.files import StoredFile
from tests.conftest import make_init_data


@dataclass
class BrokenStorage:
    def download(self, path: str) -> StoredFile:
        raise RuntimeError("bucket misconfigured")


def test_unexpected_error_returns_json_500(container) -> None:
    container.file_storage = BrokenStorage()
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get(
        "/api/file/42/report.pdf",
        headers={"X-Telegram-Init-Data": make_init_data()},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_unexpected_error_includes_debug_detail_locally(container) -> None:
    container.file_storage = BrokenStorage()
    container.settings.environment = "local"
    client = TestClient(create_app(container), raise_server_exceptions=False)

    response = client.get(
        "/api/file/42/report.pdf",
        headers={"X-Telegram-Init-Data": make_init_data()},
    )

    assert response.status_code == 500
    assert response.json()["message"] == "RuntimeError: bucket misconfigured"


def test_unknown_route_uses_error_body(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
