"""
Collection definitions for the portfolio document store.
Each collection is schema-less on disk; this module only records which
timestamps a collection carries and which keys callers may never overwrite.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Any

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"
DOCUMENT_ID = "_id"

# Keys owned by the store, never taken from caller fields
PROTECTED_KEYS = frozenset({DOCUMENT_ID, CREATED_AT, UPDATED_AT})


@dataclass(frozen=True)
class CollectionSchema:
    """Storage behaviour of a single collection"""
    name: str
    created_at: bool = False
    updated_at: bool = False


COLLECTIONS: Dict[str, CollectionSchema] = {
    "profiles": CollectionSchema("profiles"),
    "projects": CollectionSchema("projects", created_at=True, updated_at=True),
    "experiences": CollectionSchema("experiences", created_at=True, updated_at=True),
    "certifications": CollectionSchema("certifications", created_at=True, updated_at=True),
    # contacts only record when they were received
    "contacts": CollectionSchema("contacts", created_at=True),
    "testimonials": CollectionSchema("testimonials", created_at=True, updated_at=True),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_collection_schema(collection: str) -> CollectionSchema:
    """Look up a collection, rejecting names the store does not manage."""
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection: {collection}") from None


def clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop store-owned keys from caller supplied fields."""
    return {key: value for key, value in fields.items() if key not in PROTECTED_KEYS}


def stamp_new_document(collection: str, fields: Dict[str, Any], now: datetime = None) -> Dict[str, Any]:
    """Build the document body for an insert, adding creation timestamps."""
    schema = get_collection_schema(collection)
    now = now or utc_now()
    document = clean_fields(fields)
    if schema.created_at:
        document[CREATED_AT] = now
    if schema.updated_at:
        document[UPDATED_AT] = now
    return document


def stamp_update(collection: str, fields: Dict[str, Any], now: datetime = None) -> Dict[str, Any]:
    """Build the `$set` body for a merge update, refreshing `updatedAt`."""
    schema = get_collection_schema(collection)
    update = clean_fields(fields)
    if schema.updated_at:
        update[UPDATED_AT] = now or utc_now()
    return update
