from typing import List

from fastapi import APIRouter, Depends, Path, Request

from portfolio_api.dependencies import get_record_service
from portfolio_api.routers.payload import read_payload
from portfolio_api.schemas import MessageResponse, ProjectOut
from portfolio_api.services import PROJECT, RecordService

router = APIRouter()


@router.post("/projects", response_model=ProjectOut, response_model_exclude_none=True)
async def create_project(request: Request, service: RecordService = Depends(get_record_service)):
    """
    Add a project.

    `tech` is a comma separated string ("FastAPI,MongoDB") stored as a list;
    an optional `image` file is uploaded and its URL stored on the project.
    """
    fields, image = await read_payload(request, attachment_field=PROJECT.attachment_field)
    return service.upsert_with_attachment(PROJECT, fields, attachment=image)


@router.get("/projects", response_model=List[ProjectOut], response_model_exclude_none=True)
async def list_projects(service: RecordService = Depends(get_record_service)):
    return service.list_records(PROJECT)


@router.put("/projects/{project_id}", response_model=ProjectOut, response_model_exclude_none=True)
async def update_project(
    request: Request,
    project_id: str = Path(..., description="ID of the project to update"),
    service: RecordService = Depends(get_record_service),
):
    """Update a project; only the fields sent are changed."""
    fields, image = await read_payload(request, attachment_field=PROJECT.attachment_field)
    return service.upsert_with_attachment(PROJECT, fields, attachment=image, record_id=project_id)


@router.delete("/projects/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str = Path(..., description="ID of the project to delete"),
    service: RecordService = Depends(get_record_service),
):
    service.delete_record(PROJECT, project_id)
    return MessageResponse(message=PROJECT.deleted_message)
