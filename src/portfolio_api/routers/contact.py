from typing import List

from fastapi import APIRouter, Depends, Request, status

from portfolio_api.dependencies import get_record_service
from portfolio_api.routers.payload import read_payload
from portfolio_api.schemas import ContactOut, ContactResponse
from portfolio_api.services import CONTACT, RecordService

router = APIRouter()


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "description": "`name`, `email` or `message` is missing or empty.",
        },
    },
)
async def send_contact_message(request: Request, service: RecordService = Depends(get_record_service)):
    """Store a message from the contact form. `phone` is optional."""
    fields, _ = await read_payload(request)
    service.create_record(CONTACT, fields)
    return ContactResponse(success=True, message="Message sent successfully")


@router.get("/contact", response_model=List[ContactOut], response_model_exclude_none=True)
async def list_contact_messages(service: RecordService = Depends(get_record_service)):
    """List received messages, newest first."""
    return service.list_records(CONTACT)
