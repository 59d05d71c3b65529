from typing import List

from fastapi import APIRouter, Depends, Path, Request

from portfolio_api.dependencies import get_record_service
from portfolio_api.routers.payload import read_payload
from portfolio_api.schemas import MessageResponse, TestimonialOut
from portfolio_api.services import TESTIMONIAL, RecordService

router = APIRouter()


@router.post("/testimonials", response_model=TestimonialOut, response_model_exclude_none=True)
async def create_testimonial(request: Request, service: RecordService = Depends(get_record_service)):
    fields, _ = await read_payload(request)
    return service.create_record(TESTIMONIAL, fields)


@router.get("/testimonials", response_model=List[TestimonialOut], response_model_exclude_none=True)
async def list_testimonials(service: RecordService = Depends(get_record_service)):
    """List testimonials, newest first."""
    return service.list_records(TESTIMONIAL)


@router.put("/testimonials/{testimonial_id}", response_model=TestimonialOut, response_model_exclude_none=True)
async def update_testimonial(
    request: Request,
    testimonial_id: str = Path(..., description="ID of the testimonial to update"),
    service: RecordService = Depends(get_record_service),
):
    fields, _ = await read_payload(request)
    return service.update_record(TESTIMONIAL, testimonial_id, fields)


@router.delete("/testimonials/{testimonial_id}", response_model=MessageResponse)
async def delete_testimonial(
    testimonial_id: str = Path(..., description="ID of the testimonial to delete"),
    service: RecordService = Depends(get_record_service),
):
    service.delete_record(TESTIMONIAL, testimonial_id)
    return MessageResponse(message=TESTIMONIAL.deleted_message)
