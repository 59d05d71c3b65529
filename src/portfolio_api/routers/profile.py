from typing import Optional

from fastapi import APIRouter, Depends, Request

from portfolio_api.dependencies import get_record_service
from portfolio_api.routers.payload import read_payload
from portfolio_api.schemas import ProfileOut
from portfolio_api.services import PROFILE, RecordService

router = APIRouter()


@router.post("/profile", response_model=ProfileOut, response_model_exclude_none=True)
async def save_profile(request: Request, service: RecordService = Depends(get_record_service)):
    """
    Create the profile or update the existing one.

    Accepts form fields (`name`, `title`, `bio`) and an optional `photo` file;
    an uploaded photo replaces the stored photo URL.
    """
    fields, photo = await read_payload(request, attachment_field=PROFILE.attachment_field)
    return service.upsert_with_attachment(PROFILE, fields, attachment=photo)


@router.get("/profile", response_model=Optional[ProfileOut], response_model_exclude_none=True)
async def get_profile(service: RecordService = Depends(get_record_service)):
    """Return the profile, or null before one has been saved."""
    return service.get_singleton(PROFILE)
