"""
Unit Tests for the record service.
Runs against the SQLite document adapter with in-memory media stores.
"""

import pytest

from database.schemas import COLLECTIONS
from portfolio_api.adapters.storage import Attachment
from portfolio_api.errors import MissingFieldsError, RecordNotFoundError, UploadError
from portfolio_api.services import (
    CERTIFICATION,
    CONTACT,
    EXPERIENCE,
    PROFILE,
    PROJECT,
    TESTIMONIAL,
    RecordService,
)
from portfolio_api.services.records import split_list
from tests.fixtures.blob_stores import FailingBlobStore, RecordingBlobStore
from tests.fixtures.portfolio_fixtures import (
    PNG_BYTES,
    UNKNOWN_ID,
    sample_contact,
    sample_experience,
    sample_profile,
    sample_project,
    sample_testimonial,
)

PHOTO = Attachment(data=PNG_BYTES, filename="me.png", content_type="image/png")


@pytest.fixture
def service(store, blob_store) -> RecordService:
    return RecordService(store=store, blob_store=blob_store)


@pytest.fixture
def failing_service(store) -> RecordService:
    return RecordService(store=store, blob_store=FailingBlobStore())


class TestListSplitting:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Go, Rust,C++", ["Go", "Rust", "C++"]),
            ("FastAPI", ["FastAPI"]),
            ("a,,b, ,", ["a", "b"]),
            ("", []),
            ([" Go ", "", "Rust"], ["Go", "Rust"]),
        ],
    )
    def test_split_list(self, raw, expected):
        assert split_list(raw) == expected

    def test_project_tech_is_stored_as_list(self, service):
        project = service.create_record(PROJECT, sample_project(tech="Go, Rust,C++"))

        assert project["tech"] == ["Go", "Rust", "C++"]

    def test_project_without_tech_has_no_tech_field(self, service):
        fields = sample_project()
        del fields["tech"]

        project = service.create_record(PROJECT, fields)

        assert "tech" not in project


class TestFieldHandling:

    def test_unknown_and_null_fields_are_dropped(self, service):
        experience = service.create_record(
            EXPERIENCE,
            sample_experience(endDate=None, salary="secret"),
        )

        assert "salary" not in experience
        assert "endDate" not in experience
        assert experience["company"] == "Analytical Engines Ltd"

    def test_rating_is_numeric(self, service):
        testimonial = service.create_record(TESTIMONIAL, sample_testimonial(rating="4.5"))

        assert testimonial["rating"] == 4.5

    def test_numbers_are_kept_as_text(self, service):
        certification = service.create_record(CERTIFICATION, {"name": "CKA", "year": 2023})

        assert certification["year"] == "2023"

    def test_record_kinds_cover_every_collection(self):
        kinds = (PROFILE, PROJECT, EXPERIENCE, CERTIFICATION, CONTACT, TESTIMONIAL)

        assert {kind.collection for kind in kinds} == set(COLLECTIONS)


class TestCreateAndUpdate:

    def test_create_sets_timestamps(self, service):
        project = service.create_record(PROJECT, sample_project())

        assert project["_id"]
        assert project["createdAt"] == project["updatedAt"]

    def test_update_merges_and_keeps_created_at(self, service):
        created = service.create_record(EXPERIENCE, sample_experience())

        updated = service.update_record(EXPERIENCE, created["_id"], {"role": "Lead"})

        assert updated["_id"] == created["_id"]
        assert updated["role"] == "Lead"
        assert updated["company"] == created["company"]
        assert updated["createdAt"] == created["createdAt"]

    def test_update_unknown_id_raises(self, service, store):
        with pytest.raises(RecordNotFoundError) as exc_info:
            service.update_record(TESTIMONIAL, UNKNOWN_ID, {"message": "x"})

        assert exc_info.value.message == "Testimonial not found"
        assert store.count_documents("testimonials") == 0

    def test_delete_twice_raises_second_time(self, service):
        created = service.create_record(TESTIMONIAL, sample_testimonial())

        service.delete_record(TESTIMONIAL, created["_id"])
        with pytest.raises(RecordNotFoundError):
            service.delete_record(TESTIMONIAL, created["_id"])


class TestContactValidation:

    @pytest.mark.parametrize("missing", ["name", "email", "message"])
    def test_missing_required_field_is_rejected(self, service, store, missing):
        payload = sample_contact()
        del payload[missing]

        with pytest.raises(MissingFieldsError) as exc_info:
            service.create_record(CONTACT, payload)

        assert exc_info.value.fields == [missing]
        assert exc_info.value.message == "All fields required"
        assert store.count_documents("contacts") == 0

    def test_empty_required_field_is_rejected(self, service, store):
        with pytest.raises(MissingFieldsError):
            service.create_record(CONTACT, sample_contact(email=""))
        assert store.count_documents("contacts") == 0

    def test_phone_is_optional(self, service):
        contact = service.create_record(CONTACT, sample_contact(phone="+44 20 7946 0000"))

        assert contact["phone"] == "+44 20 7946 0000"
        assert "updatedAt" not in contact

    def test_contacts_list_newest_first(self, service):
        for name in ("first", "second", "third"):
            service.create_record(CONTACT, sample_contact(name=name))

        assert [c["name"] for c in service.list_records(CONTACT)] == ["third", "second", "first"]


class TestUpsertWithAttachment:

    def test_upload_url_replaces_submitted_value(self, service, blob_store):
        project = service.upsert_with_attachment(
            PROJECT,
            sample_project(image="https://elsewhere.example/old.png"),
            attachment=Attachment(data=PNG_BYTES, filename="shot.png", content_type="image/png"),
        )

        assert len(blob_store.uploads) == 1
        assert blob_store.uploads[0]["folder"] == "portfolio/projects"
        assert project["image"] == blob_store.uploads[0]["url"]

    def test_without_attachment_submitted_value_is_kept(self, service, blob_store):
        certification = service.upsert_with_attachment(
            CERTIFICATION,
            {"name": "CKA", "image": "https://elsewhere.example/cert.png"},
        )

        assert certification["image"] == "https://elsewhere.example/cert.png"
        assert blob_store.uploads == []

    def test_update_by_id_keeps_existing_image(self, service):
        created = service.upsert_with_attachment(
            PROJECT,
            sample_project(),
            attachment=Attachment(data=PNG_BYTES, filename="shot.png"),
        )

        updated = service.upsert_with_attachment(PROJECT, {"title": "Renamed"}, record_id=created["_id"])

        assert updated["title"] == "Renamed"
        assert updated["image"] == created["image"]
        assert updated["tech"] == created["tech"]

    def test_update_unknown_id_creates_nothing(self, service, store):
        with pytest.raises(RecordNotFoundError):
            service.upsert_with_attachment(PROJECT, {"title": "x"}, record_id=UNKNOWN_ID)
        assert store.count_documents("projects") == 0

    def test_folder_root_is_configurable(self, store, blob_store):
        service = RecordService(store=store, blob_store=blob_store, folder_root="/site/")

        service.upsert_with_attachment(PROFILE, sample_profile(), attachment=PHOTO)

        assert blob_store.uploads[0]["folder"] == "site/profile"

    def test_failed_upload_persists_nothing_on_create(self, failing_service, store):
        with pytest.raises(UploadError):
            failing_service.upsert_with_attachment(
                CERTIFICATION,
                {"name": "CKA"},
                attachment=Attachment(data=PNG_BYTES, filename="cert.png"),
            )
        assert store.count_documents("certifications") == 0

    def test_failed_upload_leaves_record_unchanged(self, service, failing_service):
        created = service.create_record(PROJECT, sample_project())

        with pytest.raises(UploadError):
            failing_service.upsert_with_attachment(
                PROJECT,
                {"title": "Changed"},
                attachment=Attachment(data=PNG_BYTES, filename="shot.png"),
                record_id=created["_id"],
            )

        assert service.list_records(PROJECT) == [created]


class TestProfileSingleton:

    def test_get_before_create_is_none(self, service):
        assert service.get_singleton(PROFILE) is None

    def test_first_save_creates_later_saves_update(self, service, store):
        first = service.upsert_with_attachment(PROFILE, sample_profile(), attachment=PHOTO)
        second = service.upsert_with_attachment(PROFILE, {"title": "Countess"})

        assert store.count_documents("profiles") == 1
        assert second["_id"] == first["_id"]
        assert second["title"] == "Countess"
        assert second["name"] == first["name"]
        assert second["photo"] == first["photo"]
        assert service.get_singleton(PROFILE) == second

    def test_profile_has_no_timestamps(self, service):
        profile = service.upsert_with_attachment(PROFILE, sample_profile())

        assert "createdAt" not in profile
        assert "updatedAt" not in profile

    def test_new_photo_replaces_old(self, service, blob_store):
        service.upsert_with_attachment(PROFILE, sample_profile(), attachment=PHOTO)
        updated = service.upsert_with_attachment(PROFILE, {}, attachment=PHOTO)

        assert updated["photo"] == blob_store.uploads[1]["url"]
