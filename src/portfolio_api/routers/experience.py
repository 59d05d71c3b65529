from typing import List

from fastapi import APIRouter, Depends, Path, Request

from portfolio_api.dependencies import get_record_service
from portfolio_api.routers.payload import read_payload
from portfolio_api.schemas import ExperienceOut, MessageResponse
from portfolio_api.services import EXPERIENCE, RecordService

router = APIRouter()


@router.post("/experience", response_model=ExperienceOut, response_model_exclude_none=True)
async def create_experience(request: Request, service: RecordService = Depends(get_record_service)):
    fields, _ = await read_payload(request)
    return service.create_record(EXPERIENCE, fields)


@router.get("/experience", response_model=List[ExperienceOut], response_model_exclude_none=True)
async def list_experience(service: RecordService = Depends(get_record_service)):
    return service.list_records(EXPERIENCE)


@router.put("/experience/{experience_id}", response_model=ExperienceOut, response_model_exclude_none=True)
async def update_experience(
    request: Request,
    experience_id: str = Path(..., description="ID of the experience entry to update"),
    service: RecordService = Depends(get_record_service),
):
    fields, _ = await read_payload(request)
    return service.update_record(EXPERIENCE, experience_id, fields)


@router.delete("/experience/{experience_id}", response_model=MessageResponse)
async def delete_experience(
    experience_id: str = Path(..., description="ID of the experience entry to delete"),
    service: RecordService = Depends(get_record_service),
):
    service.delete_record(EXPERIENCE, experience_id)
    return MessageResponse(message=EXPERIENCE.deleted_message)
