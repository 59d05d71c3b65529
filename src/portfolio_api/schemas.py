####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class FieldSet(BaseModel):
    """
    Fields a caller may write on a record.

    Every field is optional: unset fields are left untouched on update.
    Unknown keys are dropped, numbers sent for text fields are kept as text.
    NaN and infinity are rejected; the document store cannot hold them.
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, allow_inf_nan=False)


class ProfileFields(FieldSet):
    name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = Field(None, description="Photo URL; replaced by the uploaded file when one is sent")


class ProjectFields(FieldSet):
    title: Optional[str] = None
    description: Optional[str] = None
    tech: Optional[Union[str, List[str]]] = Field(
        None,
        description="Comma separated list of technologies",
        json_schema_extra={"example": "FastAPI,MongoDB,React"},
    )
    image: Optional[str] = None
    github: Optional[str] = Field(None, description="Repository link")
    live: Optional[str] = Field(None, description="Live demo link")


class ExperienceFields(FieldSet):
    company: Optional[str] = None
    role: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    description: Optional[str] = None


class CertificationFields(FieldSet):
    name: Optional[str] = None
    issuer: Optional[str] = None
    year: Optional[str] = None
    image: Optional[str] = None


class ContactFields(FieldSet):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None


class TestimonialFields(FieldSet):
    name: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    rating: Optional[float] = None


class RecordOut(BaseModel):
    """A stored record; `_id` is the opaque identifier assigned at creation."""
    id: str = Field(alias="_id", json_schema_extra={"example": "665f1c2e8b3e4a0012ab34cd"})

    model_config = ConfigDict(populate_by_name=True)


class TimestampedOut(RecordOut):
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ProfileOut(RecordOut):
    name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None


class ProjectOut(TimestampedOut):
    title: Optional[str] = None
    description: Optional[str] = None
    tech: Optional[List[str]] = None
    image: Optional[str] = None
    github: Optional[str] = None
    live: Optional[str] = None


class ExperienceOut(TimestampedOut):
    company: Optional[str] = None
    role: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    description: Optional[str] = None


class CertificationOut(TimestampedOut):
    name: Optional[str] = None
    issuer: Optional[str] = None
    year: Optional[str] = None
    image: Optional[str] = None


class ContactOut(RecordOut):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    createdAt: Optional[datetime] = None


class TestimonialOut(TimestampedOut):
    name: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    rating: Optional[float] = None


class MessageResponse(BaseModel):
    """Acknowledgment returned by DELETE routes."""
    message: str


class ContactResponse(BaseModel):
    """Response model for `POST /api/contact`."""
    success: bool
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"success": True, "message": "Message sent successfully"}
        }
    )
