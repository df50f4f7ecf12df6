import pytest
from fastapi import status
from fastapi.testclient import TestClient
from unittest.mock import patch, AsyncMock

from meeting_notes.exceptions import ProviderError, ValidationError
from meeting_notes.main import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@patch("meeting_notes.api.routes_summarize.summarize", new_callable=AsyncMock)
def test_summarize_success(mock_summarize, client):
    mock_summarize.return_value = "- Decision: ship Friday"

    response = client.post(
        "/api/summarize",
        json={"transcript": "Alice: let's ship on Friday.", "instruction": "Be brief"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"summary": "- Decision: ship Friday"}
    mock_summarize.assert_called_once_with("Alice: let's ship on Friday.", "Be brief")


@patch("meeting_notes.api.routes_summarize.summarize", new_callable=AsyncMock)
def test_summarize_without_instruction(mock_summarize, client):
    mock_summarize.return_value = "summary"

    response = client.post("/api/summarize", json={"transcript": "long enough transcript"})

    assert response.status_code == status.HTTP_200_OK
    mock_summarize.assert_called_once_with("long enough transcript", None)


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_empty_transcript_is_400_and_provider_untouched(mock_post, client):
    response = client.post("/api/summarize", json={"transcript": ""})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "at least 10 characters" in response.json()["error"]
    mock_post.assert_not_called()


@patch("httpx.AsyncClient.post", new_callable=AsyncMock)
def test_missing_body_fields_is_400(mock_post, client):
    response = client.post("/api/summarize", json={})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in response.json()
    mock_post.assert_not_called()


def test_non_string_transcript_is_400(client):
    response = client.post("/api/summarize", json={"transcript": 12345678901})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    error = response.json()["error"]
    assert error.startswith("Invalid request body")
    assert "transcript" in error


def test_malformed_json_is_400(client):
    response = client.post(
        "/api/summarize",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "error" in response.json()


@patch("meeting_notes.api.routes_summarize.summarize", new_callable=AsyncMock)
def test_provider_failure_is_500_with_message(mock_summarize, client):
    mock_summarize.side_effect = ProviderError("No auth credentials found")

    response = client.post("/api/summarize", json={"transcript": "long enough transcript"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "No auth credentials found"}


@patch("meeting_notes.api.routes_summarize.summarize", new_callable=AsyncMock)
def test_validation_error_from_service_is_400(mock_summarize, client):
    mock_summarize.side_effect = ValidationError("Provide a transcript with at least 10 characters.")

    response = client.post("/api/summarize", json={"transcript": "short"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Provide a transcript with at least 10 characters."}


def test_oversized_body_is_rejected(client, monkeypatch):
    from meeting_notes.config import settings

    monkeypatch.setattr(settings, "MAX_REQUEST_BYTES", 64)

    response = client.post("/api/summarize", json={"transcript": "x" * 500})

    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    assert response.json() == {"error": "Request body too large"}


def _chunks(*parts: bytes):
    # A generator body makes httpx send it chunked, with no Content-Length
    yield from parts


@patch("meeting_notes.api.routes_summarize.summarize", new_callable=AsyncMock)
def test_oversized_chunked_body_is_rejected(mock_summarize, client, monkeypatch):
    from meeting_notes.config import settings

    monkeypatch.setattr(settings, "MAX_REQUEST_BYTES", 64)

    response = client.post(
        "/api/summarize",
        content=_chunks(b'{"transcript": "', b"x" * 5000, b'"}'),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    assert response.json() == {"error": "Request body too large"}
    mock_summarize.assert_not_called()


@patch("meeting_notes.api.routes_summarize.summarize", new_callable=AsyncMock)
def test_small_chunked_body_is_accepted(mock_summarize, client, monkeypatch):
    from meeting_notes.config import settings

    monkeypatch.setattr(settings, "MAX_REQUEST_BYTES", 1024)
    mock_summarize.return_value = "summary"

    response = client.post(
        "/api/summarize",
        content=_chunks(b'{"transcript": ', b'"long enough transcript"}'),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_200_OK
    mock_summarize.assert_called_once_with("long enough transcript", None)
