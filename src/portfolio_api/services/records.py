"""
Record service for the portfolio collections.

Every write route funnels through `RecordService`: plain creates and merge-updates
for JSON-only kinds, and `upsert_with_attachment` for kinds that carry an image.
Uploads always happen before anything is persisted, so a failed upload never
leaves a new or modified record behind.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from database import DESCENDING, DocumentStore

from portfolio_api.adapters.storage import Attachment, BlobStore
from portfolio_api.errors import MissingFieldsError, RecordNotFoundError
from portfolio_api.schemas import (
    CertificationFields,
    ContactFields,
    ExperienceFields,
    FieldSet,
    ProfileFields,
    ProjectFields,
    TestimonialFields,
)

logger = logging.getLogger(__name__)

NEWEST_FIRST = (("createdAt", DESCENDING),)


@dataclass(frozen=True)
class RecordKind:
    """How one kind of record is stored and written."""
    label: str
    collection: str
    fields_model: Type[FieldSet]
    singleton: bool = False
    attachment_field: Optional[str] = None
    folder: Optional[str] = None
    list_fields: Tuple[str, ...] = ()
    required_fields: Tuple[str, ...] = ()
    sort: Optional[Sequence[Tuple[str, int]]] = None
    deleted_message: str = "Deleted"

    def build_fields(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate a raw payload into the fields to persist; absent values are omitted."""
        fields = self.fields_model.model_validate(dict(payload)).model_dump(exclude_none=True)
        for name in self.list_fields:
            if name in fields:
                fields[name] = split_list(fields[name])
        return fields


def split_list(value: Any) -> List[str]:
    """
    Turn "Go, Rust,C++" into ["Go", "Rust", "C++"]; lists pass through trimmed.

    Blank pieces are dropped rather than kept as empty strings, so "a,,b" gives
    ["a", "b"] and "" gives [].
    """
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


PROFILE = RecordKind(
    label="Profile",
    collection="profiles",
    fields_model=ProfileFields,
    singleton=True,
    attachment_field="photo",
    folder="profile",
)
PROJECT = RecordKind(
    label="Project",
    collection="projects",
    fields_model=ProjectFields,
    attachment_field="image",
    folder="projects",
    list_fields=("tech",),
    deleted_message="Project deleted",
)
EXPERIENCE = RecordKind(
    label="Experience",
    collection="experiences",
    fields_model=ExperienceFields,
    deleted_message="Experience deleted",
)
CERTIFICATION = RecordKind(
    label="Certification",
    collection="certifications",
    fields_model=CertificationFields,
    attachment_field="image",
    folder="certifications",
)
CONTACT = RecordKind(
    label="Contact",
    collection="contacts",
    fields_model=ContactFields,
    required_fields=("name", "email", "message"),
    sort=NEWEST_FIRST,
)
TESTIMONIAL = RecordKind(
    label="Testimonial",
    collection="testimonials",
    fields_model=TestimonialFields,
    sort=NEWEST_FIRST,
    deleted_message="Testimonial deleted",
)


@dataclass
class RecordService:
    """Reads and writes portfolio records against the shared store and media storage."""
    store: DocumentStore
    blob_store: BlobStore
    folder_root: str = "portfolio"
    # Serializes find-then-write on singleton kinds within this process
    singleton_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def list_records(self, kind: RecordKind) -> List[Dict[str, Any]]:
        return self.store.query_documents(kind.collection, sort=kind.sort)

    def get_singleton(self, kind: RecordKind) -> Optional[Dict[str, Any]]:
        return self.store.find_one_document(kind.collection)

    def create_record(self, kind: RecordKind, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a record straight from the request fields."""
        fields = kind.build_fields(payload)
        missing = [name for name in kind.required_fields if not fields.get(name)]
        if missing:
            logger.info(f"Rejected {kind.label} without {', '.join(missing)}")
            raise MissingFieldsError(missing)
        return self.store.create_document(kind.collection, fields)

    def update_record(self, kind: RecordKind, record_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge the request fields into an existing record."""
        updated = self.store.update_document(kind.collection, record_id, kind.build_fields(payload))
        if updated is None:
            raise RecordNotFoundError(kind.label, record_id)
        return updated

    def delete_record(self, kind: RecordKind, record_id: str) -> None:
        if not self.store.delete_document(kind.collection, record_id):
            raise RecordNotFoundError(kind.label, record_id)

    def upload_attachment(self, kind: RecordKind, attachment: Attachment) -> str:
        folder = f"{self.folder_root.strip('/')}/{kind.folder}"
        return self.blob_store.upload(
            attachment.data,
            folder=folder,
            filename=attachment.filename,
            content_type=attachment.content_type,
        )

    def upsert_with_attachment(
        self,
        kind: RecordKind,
        payload: Mapping[str, Any],
        attachment: Optional[Attachment] = None,
        record_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Write a record that may carry an uploaded file.

        The file is uploaded first and its URL replaces whatever the caller sent for the
        attachment field. Singleton kinds update their one existing record or create it;
        other kinds update `record_id` when given, create otherwise.

        Raises:
            UploadError: the upload failed; nothing was persisted.
            RecordNotFoundError: `record_id` does not name an existing record.
        """
        fields = kind.build_fields(payload)

        if attachment is not None and kind.attachment_field:
            fields[kind.attachment_field] = self.upload_attachment(kind, attachment)

        if kind.singleton:
            with self.singleton_lock:
                existing = self.store.find_one_document(kind.collection)
                if existing is not None:
                    updated = self.store.update_document(kind.collection, existing["_id"], fields)
                    if updated is not None:
                        return updated
                    # removed between lookup and update
                return self.store.create_document(kind.collection, fields)

        if record_id is not None:
            updated = self.store.update_document(kind.collection, record_id, fields)
            if updated is None:
                raise RecordNotFoundError(kind.label, record_id)
            return updated

        return self.store.create_document(kind.collection, fields)
