from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from portfolio_api.main import create_app
from tests.fixtures.blob_stores import FailingBlobStore, RecordingBlobStore
from tests.fixtures.portfolio_fixtures import (
    MALFORMED_ID,
    PNG_BYTES,
    UNKNOWN_ID,
    sample_contact,
    sample_project,
    sample_testimonial,
)


@pytest.fixture
def failing_upload_client(settings, store):
    app = create_app(settings=settings, store=store, blob_store=FailingBlobStore())
    with TestClient(app) as client:
        yield client


@pytest.mark.parametrize("missing", ["name", "email", "message"])
def test_contact_requires_name_email_message(client: TestClient, missing):
    payload = sample_contact()
    del payload[missing]

    response = client.post("/api/contact", json=payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "All fields required"}
    assert client.get("/api/contact").json() == []


def test_contact_with_empty_form_field_is_rejected(client: TestClient):
    response = client.post("/api/contact", data=sample_contact(message=""))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/api/contact").json() == []


@pytest.mark.parametrize(
    "path, label",
    [
        ("/api/projects", "Project"),
        ("/api/experience", "Experience"),
        ("/api/testimonials", "Testimonial"),
    ],
)
@pytest.mark.parametrize("record_id", [UNKNOWN_ID, MALFORMED_ID])
def test_update_unknown_record(client: TestClient, path, label, record_id):
    client.post(path, json={"name": "existing"})
    before = client.get(path).json()

    response = client.put(f"{path}/{record_id}", json={"name": "x"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": f"{label} not found"}
    assert client.get(path).json() == before


@pytest.mark.parametrize(
    "path, label",
    [
        ("/api/projects", "Project"),
        ("/api/experience", "Experience"),
        ("/api/certifications", "Certification"),
        ("/api/testimonials", "Testimonial"),
    ],
)
def test_delete_unknown_record(client: TestClient, path, label):
    response = client.delete(f"{path}/{UNKNOWN_ID}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": f"{label} not found"}


def test_second_delete_is_not_found(client: TestClient):
    created = client.post("/api/testimonials", json=sample_testimonial()).json()

    assert client.delete(f"/api/testimonials/{created['_id']}").status_code == status.HTTP_200_OK
    response = client.delete(f"/api/testimonials/{created['_id']}")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Testimonial not found"}


def test_update_unknown_project_with_image_is_not_found(client: TestClient):
    response = client.put(
        f"/api/projects/{UNKNOWN_ID}",
        data={"title": "x"},
        files={"image": ("shot.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/projects").json() == []


def test_failed_upload_creates_nothing(failing_upload_client: TestClient):
    response = failing_upload_client.post(
        "/api/projects",
        data=sample_project(),
        files={"image": ("shot.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Media storage unavailable"}
    assert failing_upload_client.get("/api/projects").json() == []


def test_failed_profile_upload_keeps_existing_profile(failing_upload_client: TestClient):
    original = failing_upload_client.post("/api/profile", data={"name": "Ada"}).json()

    response = failing_upload_client.post(
        "/api/profile",
        data={"name": "Changed"},
        files={"photo": ("me.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert failing_upload_client.get("/api/profile").json() == original


def test_health_reports_unavailable_storage(failing_upload_client: TestClient):
    body = failing_upload_client.get("/health").json()

    assert body["status"] == "degraded"
    assert body["components"]["storage"] == "unavailable"
    assert body["ready"] is False


def test_invalid_json_body(client: TestClient):
    response = client.post(
        "/api/experience",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Request body is not valid JSON"}


def test_json_body_must_be_an_object(client: TestClient):
    response = client.post("/api/experience", json=["company", "role"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Request body must be a JSON object"}


def test_invalid_rating(client: TestClient):
    response = client.post("/api/testimonials", json=sample_testimonial(rating="excellent"))

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["error"] == "Invalid field values"
    assert body["details"][0]["field"] == "rating"
    assert client.get("/api/testimonials").json() == []


@pytest.mark.parametrize("rating", ["nan", "inf", "-Infinity"])
def test_non_finite_rating_is_rejected(client: TestClient, rating):
    response = client.post("/api/testimonials", data={"name": "x", "rating": rating})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["details"][0]["field"] == "rating"

    listing = client.get("/api/testimonials")
    assert listing.status_code == status.HTTP_200_OK
    assert listing.json() == []


def test_nan_rating_in_json_body_is_rejected(client: TestClient):
    client.post("/api/testimonials", json=sample_testimonial())

    response = client.post(
        "/api/testimonials",
        content=b'{"name": "x", "rating": NaN}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    listing = client.get("/api/testimonials")
    assert listing.status_code == status.HTTP_200_OK
    assert len(listing.json()) == 1


def test_store_failure_is_a_500(settings):
    store = MagicMock()
    store.query_documents.side_effect = RuntimeError("database unavailable")
    app = create_app(settings=settings, store=store, blob_store=RecordingBlobStore())

    with TestClient(app) as client:
        response = client.get("/api/projects", headers={"Origin": "https://ada.dev"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "database unavailable"}
    assert response.headers["access-control-allow-origin"] == "*"
