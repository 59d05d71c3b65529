from typing import List

from fastapi import APIRouter, Depends, Path, Request

from portfolio_api.dependencies import get_record_service
from portfolio_api.routers.payload import read_payload
from portfolio_api.schemas import CertificationOut, MessageResponse
from portfolio_api.services import CERTIFICATION, RecordService

router = APIRouter()


@router.post("/certifications", response_model=CertificationOut, response_model_exclude_none=True)
async def create_certification(request: Request, service: RecordService = Depends(get_record_service)):
    """Add a certification with an optional certificate `image` file."""
    fields, image = await read_payload(request, attachment_field=CERTIFICATION.attachment_field)
    return service.upsert_with_attachment(CERTIFICATION, fields, attachment=image)


@router.get("/certifications", response_model=List[CertificationOut], response_model_exclude_none=True)
async def list_certifications(service: RecordService = Depends(get_record_service)):
    return service.list_records(CERTIFICATION)


@router.delete("/certifications/{certification_id}", response_model=MessageResponse)
async def delete_certification(
    certification_id: str = Path(..., description="ID of the certification to delete"),
    service: RecordService = Depends(get_record_service),
):
    service.delete_record(CERTIFICATION, certification_id)
    return MessageResponse(message=CERTIFICATION.deleted_message)
